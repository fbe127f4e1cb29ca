"""Job run support shared by the API and the job runner."""
