"""Infrastructure layer - resolvers, registries, locale context and logging."""
