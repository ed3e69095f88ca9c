from sqlalchemy.orm import declarative_base

# Shared declarative base. Sessions and engines belong to the callers that
# load a month's snapshot and persist the resulting ledger.
Base = declarative_base()
