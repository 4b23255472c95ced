"""
ProjectHub Backend — Pydantic Request/Response Schemas
========================================================

JSON field names follow the public API (`UserID`, `ProjectName`,
`CreationDate`, ...). Response models read the snake_case ORM attributes
through validation aliases, so an ORM row, a parsed JSON body and a
re-hydrated response all validate into the same model.
"""
