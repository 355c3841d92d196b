"""Relationship resolution: graph indexing, path search, classification and wording."""

from kinpath.resolver.ancestors import CommonAncestorResolver
from kinpath.resolver.classifier import RelationshipClassifier
from kinpath.resolver.graph_index import GraphIndex
from kinpath.resolver.index_cache import GraphIndexCache
from kinpath.resolver.labels import LabelRenderer
from kinpath.resolver.path_finder import DepthExceeded, NotConnected, PathFinder
from kinpath.resolver.service import RelationshipResolver

__all__ = [
    "CommonAncestorResolver",
    "DepthExceeded",
    "GraphIndex",
    "GraphIndexCache",
    "LabelRenderer",
    "NotConnected",
    "PathFinder",
    "RelationshipClassifier",
    "RelationshipResolver",
]
