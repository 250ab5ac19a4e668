"""Resolver package for the GraphQL schema.

Types, queries and mutations import these functions lazily; each module
owns the resolvers for one entity.
"""
