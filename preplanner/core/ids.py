import uuid

def new_project_id() -> str:
    return str(uuid.uuid4())

"""
ID generation utilities & it provides:
- Globally unique project IDs

The main purpose:
Consistent identifier creation across system.
"""
