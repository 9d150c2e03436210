"""
Service layer abstraction.

Services encapsulate the user store operations so that API handlers
only translate between HTTP and service calls.
"""
