"""
Use Cases

Organized into domain folders:
- audit/: Audit record write and read paths
- events/: Deduplicated event ingestion
- admin/: Catalog seeding
"""
