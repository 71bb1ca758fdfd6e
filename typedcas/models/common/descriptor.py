"""
Read a UIMA type system descriptor into a TypeCatalog

Only the parts needed for the catalog are read: each type's name, supertype
and description, plus its features' names, ranges and element types.
Types may appear in any order in the file; they are registered parents first.
"""

import logging
import os
import xml.etree.ElementTree as etree

import networkx as nx

from typedcas.models.common.exceptions import TypeSystemError
from typedcas.models.common.type_catalog import ANNOTATION, FeatureDescriptor, TypeCatalog

logger = logging.getLogger('typedcas')

NAMESPACE = "http://uima.apache.org/resourceSpecifier"

def _tag(name):
    return "{%s}%s" % (NAMESPACE, name)

def _child_text(node, name):
    child = node.find(_tag(name))
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text if text else None

def read_types(root):
    """
    Extract a list of (name, supertype, features, description) from a typeSystemDescription node
    """
    types = []
    for type_node in root.findall("./%s/%s" % (_tag("types"), _tag("typeDescription"))):
        name = _child_text(type_node, "name")
        if name is None:
            raise TypeSystemError("Found a typeDescription without a name")
        supertype = _child_text(type_node, "supertypeName") or ANNOTATION
        features = []
        for feature_node in type_node.findall("./%s/%s" % (_tag("features"), _tag("featureDescription"))):
            feature_name = _child_text(feature_node, "name")
            range_name = _child_text(feature_node, "rangeTypeName")
            if feature_name is None or range_name is None:
                raise TypeSystemError("Type %s has a feature without a name or range" % name)
            features.append(FeatureDescriptor(feature_name, range_name,
                                              _child_text(feature_node, "elementType"),
                                              _child_text(feature_node, "description")))
        types.append((name, supertype, tuple(features), _child_text(type_node, "description")))
    return types

def _read_imports(root, base_dir, seen):
    types = []
    for import_node in root.findall("./%s/%s" % (_tag("imports"), _tag("import"))):
        location = import_node.get("location")
        if location is None:
            logger.warning("Skipping import by name %s: only imports by location are followed", import_node.get("name"))
            continue
        if base_dir is None:
            raise TypeSystemError("Cannot follow import of %s from a descriptor that was not read from a file" % location)
        types.extend(_read_file(os.path.join(base_dir, location), seen))
    return types

def _read_file(path, seen):
    path = os.path.abspath(path)
    if path in seen:
        return []
    seen.add(path)
    root = etree.parse(path).getroot()
    return _read_imports(root, os.path.dirname(path), seen) + read_types(root)

def register_types(types, catalog=None):
    """
    Register (name, supertype, features, description) entries into a catalog in dependency order
    """
    if catalog is None:
        catalog = TypeCatalog()

    declared = {}
    for entry in types:
        name = entry[0]
        if name in declared and declared[name] != entry:
            raise TypeSystemError("Type %s is declared twice with different definitions" % name)
        declared[name] = entry

    graph = nx.DiGraph()
    for name, supertype, _, _ in declared.values():
        graph.add_node(name)
        if supertype in declared:
            graph.add_edge(supertype, name)
        elif supertype not in catalog:
            raise TypeSystemError("Supertype %s of %s is neither declared nor known" % (supertype, name))

    try:
        cycle = nx.find_cycle(graph)
    except nx.NetworkXNoCycle:
        cycle = None
    if cycle:
        raise TypeSystemError("Type hierarchy has a cycle: %s" % " -> ".join(edge[0] for edge in cycle))

    for name in nx.topological_sort(graph):
        _, supertype, features, description = declared[name]
        catalog.register(name, parent=supertype, features=features, description=description)
    catalog.validate()
    logger.debug("Registered %d types from a type system descriptor", len(declared))
    return catalog

def parse_type_system(xml_text, catalog=None):
    """
    Build (or extend) a catalog from the text of a typeSystemDescription.

    Imports by location cannot be followed, since there is no file to resolve them against.
    """
    try:
        root = etree.fromstring(xml_text)
    except etree.ParseError as e:
        raise TypeSystemError("Could not parse type system descriptor") from e
    types = _read_imports(root, None, set()) + read_types(root)
    return register_types(types, catalog)

def load_type_system(path, catalog=None):
    """
    Build (or extend) a catalog from a descriptor file, following imports by location
    """
    try:
        types = _read_file(path, set())
    except etree.ParseError as e:
        raise TypeSystemError("Could not parse type system descriptor %s" % path) from e
    return register_types(types, catalog)
