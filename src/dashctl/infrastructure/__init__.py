"""Infrastructure layer: document files, write serialization, the store.

This layer depends on the domain layer and the standard library.
It must never import from services, commands, or output.
The store is the only component allowed to touch the document files.
"""
