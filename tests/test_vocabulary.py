"""Tests for role/type vocabulary lookup."""

import pytest

from partgate.errors import UnknownVocabularyTerm
from partgate.vocabulary import Vocabulary, default_vocabulary, load_vocabulary

SO = "http://identifiers.org/so/"


def test_resolve_primary_role():
    assert default_vocabulary().resolve_role("Promoter") == SO + "SO:0000167"


def test_resolve_refinement_role():
    assert default_vocabulary().resolve_role("Inducible Promoter") == SO + "SO:0002051"


def test_primary_role_wins_over_refinement():
    vocab = Vocabulary(
        roles={"Shared": "http://example.org/primary"},
        refinements={"Shared": "http://example.org/refinement"},
        types={},
    )
    assert vocab.resolve_role("Shared") == "http://example.org/primary"


def test_resolve_type():
    assert default_vocabulary().resolve_type("DNA molecule").endswith("#DnaRegion")


def test_unknown_role():
    with pytest.raises(UnknownVocabularyTerm, match="Unknown role 'Flux Capacitor'"):
        default_vocabulary().resolve_role("Flux Capacitor")


def test_unknown_type():
    with pytest.raises(UnknownVocabularyTerm):
        default_vocabulary().resolve_type("Promoter")


def test_role_names_are_not_types():
    # Types use a single table; role names never resolve as types.
    vocab = default_vocabulary()
    assert "CDS" in vocab.roles
    with pytest.raises(UnknownVocabularyTerm):
        vocab.resolve_type("CDS")


def test_tables_are_read_only():
    vocab = default_vocabulary()
    with pytest.raises(TypeError):
        vocab.roles["Promoter"] = "http://example.org/other"


def test_default_vocabulary_is_shared():
    assert default_vocabulary() is default_vocabulary()


def test_load_vocabulary_from_file(tmp_path):
    path = tmp_path / "terms.yaml"
    path.write_text(
        "roles:\n  Widget: http://example.org/widget\n"
        "types:\n  Gadget: http://example.org/gadget\n"
    )
    vocab = load_vocabulary(path)
    assert vocab.resolve_role("Widget") == "http://example.org/widget"
    assert vocab.resolve_type("Gadget") == "http://example.org/gadget"
    assert dict(vocab.refinements) == {}


def test_all_identifiers_are_absolute():
    vocab = default_vocabulary()
    for table in (vocab.roles, vocab.refinements, vocab.types):
        for uri in table.values():
            assert uri.startswith("http://")
