"""Workshop bounded context: HTTP interface."""
