"""Infrastructure adapters: logging and the GraphQL transport."""
