"""
Schema definitions.

``student`` holds the stored ``StudentRecord`` value and the Pydantic
models used for request and response bodies.  Schemas are separated
from persistence to decouple API representation from the on-disk log.
"""
