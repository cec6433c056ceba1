"""
Service layer abstraction.

Services encapsulate business logic: validating and normalizing
input, issuing parameterized SQL against the database and raising
domain errors that the API layer turns into HTTP responses.
"""
