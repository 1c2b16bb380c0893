"""
Pydantic schema definitions for API payloads and stored records.

Each record kind (content, speakers, registrations, users) defines its
own models for create, update and read.  Field names are snake_case
in Python and camelCase on the wire; ``CamelModel`` handles the
mapping so stored documents keep the camelCase keys the site's
front-end expects.
"""
