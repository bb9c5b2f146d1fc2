"""
API package.

Routes are unversioned by default.  Endpoints that differ between API
versions declare a ``VersionedEndpoint`` (see ``versioning``) and pick
their handler per request from the version the client asked for.
"""
