"""Recipe search provider connectors."""
