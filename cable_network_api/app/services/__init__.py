"""
Service layer abstraction.

Each service encapsulates business logic for a domain (locations,
the service catalog, administrators and their GeoJSON,
authentication).  Endpoints stay thin and only translate between
HTTP and these services.
"""
