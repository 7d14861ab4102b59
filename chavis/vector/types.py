"""
Vector projection records - non-canonical, advisory layer over the SQLite knowledge store.
"""

from typing import Dict, Optional
import numpy as np
from dataclasses import dataclass, field


@dataclass
class VectorRecord:
    """Represents a vector record with its document text and metadata."""

    id: str
    """Document identifier (knowledge_<item id> for knowledge documents)"""

    vector: Optional[np.ndarray]
    """The vector representation of the document text"""

    text: str = ""
    """Document text returned to callers on a match"""

    metadata: Dict[str, object] = field(default_factory=dict)
    """Scalar metadata associated with the document"""


@dataclass
class QueryResult:
    """Represents a search result from vector store."""

    id: str
    """Identifier for the matching record"""

    score: float
    """Similarity score of the match"""

    text: str
    """Document text of the matching record"""

    metadata: Dict[str, object]
    """Metadata associated with the matched record"""
