"""
Tests of the annotation store: creation, lookup, features and selection
"""
import json

import pytest

from typedcas.models.common.cas import AnnotationStore
from typedcas.models.common.exceptions import InvalidRangeError, TypeSystemError, UnknownFeatureError, UnknownHandleError, UnknownTypeError
from typedcas.models.common.type_catalog import (DOCUMENT_ANNOTATION, FLOAT_ARRAY, FS_ARRAY, FS_LIST, INTEGER_ARRAY, STRING, STRING_LIST, TOP,
                                                  FeatureDescriptor, TypeCatalog)
from typedcas.tests import *

pytestmark = pytest.mark.travis

@pytest.fixture
def catalog():
    catalog = TypeCatalog()
    catalog.register("Token", features=[FeatureDescriptor("index", "uima.cas.Integer"),
                                        FeatureDescriptor("score", "uima.cas.Float"),
                                        FeatureDescriptor("stop", "uima.cas.Boolean")])
    catalog.register("Dependency", features=[FeatureDescriptor("Governor", "Token"),
                                             FeatureDescriptor("Dependent", "Token"),
                                             FeatureDescriptor("DependencyType", STRING)])
    catalog.register("NEG", parent="Dependency")
    catalog.register("DOBJ", parent="Dependency")
    catalog.register("Chunk", features=[FeatureDescriptor("tokens", FS_ARRAY, "Token")])
    catalog.register("DocumentFlags", parent=TOP)
    return catalog

@pytest.fixture
def cas(catalog):
    return AnnotationStore(NEG_DOC, catalog)

@pytest.fixture
def tokens(cas):
    return [cas.create("Token", 0, 2), cas.create("Token", 3, 6), cas.create("Token", 7, 9)]

def test_create_and_get(cas, catalog):
    handle = cas.create("NEG", 3, 6)
    record = cas.get(handle)
    assert record.handle == handle
    assert record.begin == 3
    assert record.end == 6
    assert record.type_id == catalog.id("NEG")
    assert cas.covered_text(handle) == "not"

@pytest.mark.parametrize("begin, end", [(0, 0), (0, 9), (9, 9), (2, 2), (3, 6)])
def test_valid_ranges(cas, begin, end):
    handle = cas.create("Token", begin, end)
    record = cas.get(handle)
    assert (record.begin, record.end) == (begin, end)

@pytest.mark.parametrize("begin, end", [(-1, 2), (3, 2), (0, 10), (10, 10), (-2, -1)])
def test_invalid_ranges(cas, begin, end):
    with pytest.raises(InvalidRangeError) as excinfo:
        cas.create("Token", begin, end)
    assert excinfo.value.length == len(NEG_DOC)
    assert len(cas) == 0

def test_invalid_range_is_a_value_error(cas):
    with pytest.raises(ValueError):
        cas.create("NEG", 6, 3)

def test_failed_create_uses_no_handle(cas):
    first = cas.create("Token", 0, 2)
    with pytest.raises(InvalidRangeError):
        cas.create("Token", 5, 100)
    with pytest.raises(TypeError):
        cas.create("Token", 0, 2, index="zero")
    second = cas.create("Token", 3, 6)
    assert second == first + 1
    assert len(cas) == 2

def test_non_integer_offsets(cas):
    with pytest.raises(TypeError):
        cas.create("Token", 1.0, 2)
    with pytest.raises(TypeError):
        cas.create("Token", True, 2)
    with pytest.raises(TypeError):
        cas.create("Token", 0, "2")
    assert len(cas) == 0

def test_unknown_handle(cas):
    with pytest.raises(UnknownHandleError):
        cas.get(-1)
    with pytest.raises(KeyError):
        cas.get("not a handle")
    assert -1 not in cas

def test_handle_from_other_store(cas, catalog):
    other = AnnotationStore(NEG_DOC, catalog)
    handle = other.create("NEG", 3, 6)
    assert handle in other
    assert handle not in cas
    with pytest.raises(UnknownHandleError):
        cas.get(handle)
    with pytest.raises(UnknownHandleError):
        cas.view(handle)

def test_handles_unique_across_stores(catalog):
    stores = [AnnotationStore(NEG_DOC, catalog) for _ in range(3)]
    handles = [store.create("Token", 0, 2) for store in stores for _ in range(2)]
    assert len(set(handles)) == len(handles)

def test_unknown_type(cas):
    with pytest.raises(UnknownTypeError):
        cas.create("RCMOD", 0, 2)
    assert len(cas) == 0

def test_non_annotation_type(cas):
    with pytest.raises(TypeSystemError):
        cas.create("DocumentFlags", 0, 2)
    assert len(cas) == 0

def test_text_must_be_str(catalog):
    with pytest.raises(TypeError):
        AnnotationStore(None, catalog)

def test_primitive_features(cas):
    handle = cas.create("Token", 0, 2, index=0, score=1, stop=True)
    assert cas.get_feature(handle, "index") == 0
    assert cas.get_feature(handle, "score") == 1
    assert cas.get_feature(handle, "stop") is True

def test_unset_features_are_none(cas):
    handle = cas.create("NEG", 3, 6)
    assert cas.get(handle).features == {"Governor": None, "Dependent": None, "DependencyType": None}
    assert cas.get_feature(handle, "Governor") is None

@pytest.mark.parametrize("features", [{"index": "0"}, {"index": 1.5}, {"index": False},
                                      {"score": "high"}, {"stop": 1}])
def test_bad_primitive_features(cas, features):
    with pytest.raises(TypeError):
        cas.create("Token", 0, 2, **features)
    assert len(cas) == 0

def test_unknown_feature(cas):
    with pytest.raises(UnknownFeatureError):
        cas.create("NEG", 3, 6, Head=None)
    assert len(cas) == 0

def test_reference_features(cas, tokens):
    do_token, not_token, go_token = tokens
    handle = cas.create("NEG", 3, 6, Governor=go_token, Dependent=cas.view(not_token), DependencyType="neg")
    assert cas.get(handle).features["Governor"] == go_token
    assert cas.get_feature(handle, "Governor") == cas.view(go_token)
    assert cas.get_feature(handle, "Dependent").text == "not"
    assert cas.get_feature(handle, "DependencyType") == "neg"

def test_reference_of_wrong_type(cas, tokens):
    neg = cas.create("NEG", 3, 6)
    with pytest.raises(TypeError):
        cas.create("DOBJ", 7, 9, Governor=neg)
    with pytest.raises(TypeError):
        cas.create("DOBJ", 7, 9, Governor="go")
    with pytest.raises(UnknownHandleError):
        cas.create("DOBJ", 7, 9, Governor=-5)
    assert len(cas) == 4

def test_reference_to_other_store(cas, catalog):
    other = AnnotationStore(NEG_DOC, catalog)
    token = other.add("Token", 3, 6)
    with pytest.raises(ValueError):
        cas.create("NEG", 3, 6, Dependent=token)

def test_array_features(cas, tokens):
    handle = cas.create("Chunk", 0, 9, tokens=tokens)
    assert cas.get(handle).features["tokens"] == tuple(tokens)
    assert [x.text for x in cas.get_feature(handle, "tokens")] == ["do", "not", "go"]

def test_bad_array_features(cas, tokens):
    neg = cas.create("NEG", 3, 6)
    with pytest.raises(TypeError):
        cas.create("Chunk", 0, 9, tokens=tokens[0])
    with pytest.raises(TypeError):
        cas.create("Chunk", 0, 9, tokens=[tokens[0], neg])

def test_collection_features(cas, catalog, tokens):
    catalog.register("Mention", features=[("labels", STRING_LIST), ("offsets", INTEGER_ARRAY),
                                          ("scores", FLOAT_ARRAY), ("members", FS_LIST, "Token")])
    catalog.validate()
    handle = cas.create("Mention", 0, 9, labels=["neg", "verb"], offsets=(0, 3), scores=[0.5, 1], members=tokens[1:])
    assert cas.get_feature(handle, "labels") == ["neg", "verb"]
    assert cas.get_feature(handle, "offsets") == [0, 3]
    assert cas.get_feature(handle, "scores") == [0.5, 1]
    assert [x.text for x in cas.get_feature(handle, "members")] == ["not", "go"]
    assert cas.view(handle).to_dict()["features"]["labels"] == ["neg", "verb"]

@pytest.mark.parametrize("features", [{"labels": "neg"}, {"labels": ["neg", 1]}, {"offsets": [0, True]},
                                      {"scores": ["high"]}, {"members": ["do"]}])
def test_bad_collection_features(cas, catalog, features):
    catalog.register("Mention", features=[("labels", STRING_LIST), ("offsets", INTEGER_ARRAY),
                                          ("scores", FLOAT_ARRAY), ("members", FS_LIST, "Token")])
    with pytest.raises(TypeError):
        cas.create("Mention", 0, 9, **features)
    assert len(cas) == 0

def test_document_annotation(cas):
    document = cas.add(DOCUMENT_ANNOTATION, 0, len(NEG_DOC), language="en")
    assert document.language == "en"
    assert document.is_a("uima.tcas.Annotation")
    assert cas.select("DocumentAnnotation") == [document]

def test_records_are_read_only(cas):
    handle = cas.create("NEG", 3, 6)
    record = cas.get(handle)
    with pytest.raises(TypeError):
        record.features["DependencyType"] = 12
    assert cas.get_feature(handle, "DependencyType") is None
    cas.set_feature(handle, "DependencyType", "neg")
    assert record.features["DependencyType"] == "neg"

def test_set_feature(cas, tokens):
    handle = cas.create("NEG", 3, 6)
    cas.set_feature(handle, "DependencyType", "neg")
    cas.set_feature(handle, "Dependent", tokens[1])
    assert cas.get_feature(handle, "DependencyType") == "neg"
    assert cas.get_feature(handle, "Dependent").handle == tokens[1]

    with pytest.raises(TypeError):
        cas.set_feature(handle, "DependencyType", 7)
    assert cas.get_feature(handle, "DependencyType") == "neg"

    cas.set_feature(handle, "DependencyType", None)
    assert cas.get_feature(handle, "DependencyType") is None

def test_select_by_type(cas, tokens):
    neg = cas.create("NEG", 3, 6)
    dobj = cas.create("DOBJ", 7, 9)
    assert [x.handle for x in cas.select("Token")] == tokens
    assert [x.handle for x in cas.select("Dependency")] == [neg, dobj]
    assert [x.handle for x in cas.select("NEG")] == [neg]
    assert cas.select("Dependency", include_subtypes=False) == []

def test_select_covered(cas, tokens):
    neg = cas.create("NEG", 3, 6)
    assert [x.handle for x in cas.select(begin=3, end=6)] == [tokens[1], neg]
    assert [x.handle for x in cas.select("NEG", begin=0, end=5)] == []
    assert [x.handle for x in cas.select("Token", begin=2)] == tokens[1:]
    assert [x.handle for x in cas.select("Token", end=6)] == tokens[:2]

def test_index_order(cas):
    short = cas.create("Token", 0, 2)
    later = cas.create("Token", 7, 9)
    whole = cas.create("Token", 0, 9)
    same = cas.create("Token", 0, 2)
    assert [x.handle for x in cas] == [whole, short, same, later]

def test_select_sees_new_annotations(cas):
    assert cas.select("Token") == []
    handle = cas.create("Token", 0, 2)
    assert [x.handle for x in cas.select("Token")] == [handle]
    second = cas.create("Token", 3, 6)
    assert [x.handle for x in cas.select("Token")] == [handle, second]

def test_select_empty_store(cas):
    assert cas.select() == []
    assert cas.select("NEG", begin=0, end=9) == []
    assert list(cas) == []

def test_view_cache(catalog):
    cas = AnnotationStore(NEG_DOC, catalog)
    handle = cas.create("NEG", 3, 6)
    assert cas.view(handle) is cas.view(handle)

    cas = AnnotationStore(NEG_DOC, catalog, use_existing_instance=False)
    handle = cas.create("NEG", 3, 6)
    first = cas.view(handle)
    second = cas.view(handle)
    assert first is not second
    assert first == second

def test_add(cas, catalog):
    view = cas.add("NEG", 3, 6, DependencyType="neg")
    assert view.handle in cas
    assert view.type_id == catalog.id("NEG")
    assert view.DependencyType == "neg"

def test_to_dict(cas, tokens):
    cas.create("NEG", 3, 6, Dependent=tokens[1], DependencyType="neg")
    dumped = cas.to_dict()
    assert [x["text"] for x in dumped] == ["do", "not", "not", "go"]
    assert dumped[2]["type"] == "NEG"
    assert dumped[2]["features"] == {"Dependent": tokens[1], "DependencyType": "neg"}
    assert "features" not in dumped[0]
    assert json.loads(repr(cas)) == dumped
