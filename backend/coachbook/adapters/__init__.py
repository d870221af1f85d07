"""
Mappings between the canonical entities and each persistence backend.

`relational` targets the SQLAlchemy models, `document` targets MongoDB
documents. Field constraints live on the canonical entities, so both
directions validate against the same limits.
"""
