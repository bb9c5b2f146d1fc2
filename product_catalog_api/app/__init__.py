"""
Application package.

The API is organised into ``core`` (configuration, logging, database
and transport security), ``schemas`` (pydantic payloads), ``services``
(the product store and its query pipeline) and ``api`` (routers and
version negotiation).
"""
