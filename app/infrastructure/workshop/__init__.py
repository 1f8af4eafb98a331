"""Workshop bounded context: infrastructure adapters."""
