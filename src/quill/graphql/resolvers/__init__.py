"""Resolver functions referenced by the GraphQL types, queries and mutations.

Resolvers validate arguments, open one session per call, delegate to the
post service and convert ORM rows into GraphQL types.
"""
