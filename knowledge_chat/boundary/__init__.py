"""
Boundary layer: knowledge store persistence and model providers.

Collaborator contracts live in knowledge_chat.boundary.interfaces.
"""
