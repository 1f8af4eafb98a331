"""Workshop bounded context: application use cases."""
