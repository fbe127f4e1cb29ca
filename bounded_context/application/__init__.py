"""Application layer - use cases, job run annotation and logging support."""
