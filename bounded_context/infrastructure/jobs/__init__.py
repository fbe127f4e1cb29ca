"""Job runner infrastructure: concurrency locks and enqueuers."""
