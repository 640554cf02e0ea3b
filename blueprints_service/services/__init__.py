"""Service layer package housing core business logic.

Contains the blueprint service, the point filters, and the persistence
backends (in-memory and SQL). Routes reach the service through the Flask
app's extensions.
"""
