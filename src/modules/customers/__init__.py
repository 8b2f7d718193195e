"""Customer management bounded context."""
