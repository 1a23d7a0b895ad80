"""
Summary: Public exports for the similarity lookup feature.
Why: Give callers one import path for the client and file hashing helper.
"""

from .client import SimilarityClient
from .hashing import calculate_file_hash

__all__ = ["SimilarityClient", "calculate_file_hash"]
