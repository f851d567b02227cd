"""
Knowledge Chat.

Retrieval-augmented chat over a private text corpus: chunking, embedding,
cosine-similarity retrieval and grounded answer generation behind a
staged HTTP protocol.
"""

__version__ = "0.1.0"
