"""Vocabulary — canvas role/type names to registry ontology identifiers."""

from partgate.vocabulary.lookup import Vocabulary, default_vocabulary, load_vocabulary

__all__ = ["Vocabulary", "default_vocabulary", "load_vocabulary"]
