"""Database plumbing: engine factory, metadata, column types, schema, migrations."""
