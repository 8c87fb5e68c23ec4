"""Resolver package for the GraphQL schema.

Field and root resolvers referenced by the types, queries and mutations.
Reads go through the request's loaders; writes go through the gateway.
"""
