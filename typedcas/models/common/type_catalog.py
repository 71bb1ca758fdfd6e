"""
The type catalog: a per-process (or per-test) table of annotation types

Each registered type gets an integer id, assigned once and never reused.
The hierarchy is single inheritance, kept as a tree in a networkx DiGraph
with edges from parent to child, rooted at uima.cas.TOP.
"""

from collections import namedtuple
import logging

import networkx as nx

from typedcas.models.common.exceptions import AmbiguousTypeError, TypeSystemError, UnknownFeatureError, UnknownTypeError

logger = logging.getLogger('typedcas')

TOP = 'uima.cas.TOP'
ANNOTATION = 'uima.tcas.Annotation'
ANNOTATION_BASE = 'uima.cas.AnnotationBase'
DOCUMENT_ANNOTATION = 'uima.tcas.DocumentAnnotation'

STRING = 'uima.cas.String'
INTEGER = 'uima.cas.Integer'
LONG = 'uima.cas.Long'
SHORT = 'uima.cas.Short'
BYTE = 'uima.cas.Byte'
FLOAT = 'uima.cas.Float'
DOUBLE = 'uima.cas.Double'
BOOLEAN = 'uima.cas.Boolean'

ARRAY_BASE = 'uima.cas.ArrayBase'
FS_ARRAY = 'uima.cas.FSArray'
STRING_ARRAY = 'uima.cas.StringArray'
BOOLEAN_ARRAY = 'uima.cas.BooleanArray'
BYTE_ARRAY = 'uima.cas.ByteArray'
SHORT_ARRAY = 'uima.cas.ShortArray'
INTEGER_ARRAY = 'uima.cas.IntegerArray'
LONG_ARRAY = 'uima.cas.LongArray'
FLOAT_ARRAY = 'uima.cas.FloatArray'
DOUBLE_ARRAY = 'uima.cas.DoubleArray'

LIST_BASE = 'uima.cas.ListBase'
FS_LIST = 'uima.cas.FSList'
STRING_LIST = 'uima.cas.StringList'
INTEGER_LIST = 'uima.cas.IntegerList'
FLOAT_LIST = 'uima.cas.FloatList'

PRIMITIVE_RANGES = (STRING, INTEGER, LONG, SHORT, BYTE, FLOAT, DOUBLE, BOOLEAN)

# collections of primitive values, mapped to the range of their elements
PRIMITIVE_COLLECTIONS = {
    STRING_ARRAY: STRING,
    BOOLEAN_ARRAY: BOOLEAN,
    BYTE_ARRAY: BYTE,
    SHORT_ARRAY: SHORT,
    INTEGER_ARRAY: INTEGER,
    LONG_ARRAY: LONG,
    FLOAT_ARRAY: FLOAT,
    DOUBLE_ARRAY: DOUBLE,
    STRING_LIST: STRING,
    INTEGER_LIST: INTEGER,
    FLOAT_LIST: FLOAT,
}

# collections of annotations; the feature's element_type narrows what they may hold
FS_COLLECTIONS = (FS_ARRAY, FS_LIST)

# attributes of every view class, which a feature property would shadow
RESERVED_FEATURE_NAMES = frozenset([
    'store', 'handle', 'begin', 'end', 'type_id', 'type_name', 'text',
    'get_feature', 'set_feature', 'features', 'is_a', 'to_dict', 'pretty_print',
    'create', 'add_property', 'TYPE_NAME', 'TYPE_ID', 'CATALOG',
])

FeatureDescriptor = namedtuple('FeatureDescriptor', ['name', 'range', 'element_type', 'description'],
                               defaults=(STRING, None, None))
TypeDescriptor = namedtuple('TypeDescriptor', ['name', 'type_id', 'parent_id', 'features', 'description'])

# the core UIMA types every catalog starts with, in id order
BUILTIN_TYPES = (
    (TOP, None, (), "The root of the type hierarchy"),
    (ANNOTATION, ANNOTATION_BASE, (), "A typed span over the document text"),
    (ANNOTATION_BASE, TOP, (), "Feature structures that belong to a view of the document"),
    (DOCUMENT_ANNOTATION, ANNOTATION,
     (FeatureDescriptor('language', STRING, None, "The language of the document"),),
     "Covers the whole document"),
    (ARRAY_BASE, TOP, (), "Fixed-size arrays"),
    (FS_ARRAY, ARRAY_BASE, (), "An array of feature structures"),
    (STRING_ARRAY, ARRAY_BASE, (), None),
    (BOOLEAN_ARRAY, ARRAY_BASE, (), None),
    (BYTE_ARRAY, ARRAY_BASE, (), None),
    (SHORT_ARRAY, ARRAY_BASE, (), None),
    (INTEGER_ARRAY, ARRAY_BASE, (), None),
    (LONG_ARRAY, ARRAY_BASE, (), None),
    (FLOAT_ARRAY, ARRAY_BASE, (), None),
    (DOUBLE_ARRAY, ARRAY_BASE, (), None),
    (LIST_BASE, TOP, (), "Linked lists"),
    (FS_LIST, LIST_BASE, (), "A list of feature structures"),
    (STRING_LIST, LIST_BASE, (), None),
    (INTEGER_LIST, LIST_BASE, (), None),
    (FLOAT_LIST, LIST_BASE, (), None),
)

def short_name(name):
    """ de.tudarmstadt.ukp.dkpro.core.api.syntax.type.dependency.NEG -> NEG """
    return name.rsplit('.', 1)[-1]

def _to_feature(feature):
    if isinstance(feature, FeatureDescriptor):
        return feature
    if isinstance(feature, str):
        return FeatureDescriptor(feature)
    if isinstance(feature, dict):
        return FeatureDescriptor(**feature)
    return FeatureDescriptor(*feature)

class TypeCatalog:
    """
    Maps type names to stable integer ids and records the parent of each type.

    A catalog always starts with the core UIMA types in BUILTIN_TYPES: uima.cas.TOP (id 0),
    uima.tcas.Annotation (id 1), DocumentAnnotation, and the array and list types.
    Stores created against a catalog resolve every type name through it,
    so one catalog should be shared by all the stores of a run.
    """

    def __init__(self):
        self._descriptors = []
        self._by_name = {}
        self._by_short_name = {}
        self._graph = nx.DiGraph()
        # filled in by views.view_class
        self.view_classes = {}

        builtin_ids = {entry[0]: type_id for type_id, entry in enumerate(BUILTIN_TYPES)}
        for name, parent, features, description in BUILTIN_TYPES:
            self._add_type(name, None if parent is None else builtin_ids[parent], features, description)

    def _add_type(self, name, parent_id, features, description):
        type_id = len(self._descriptors)
        descriptor = TypeDescriptor(name, type_id, parent_id, features, description)
        self._descriptors.append(descriptor)
        self._by_name[name] = type_id
        self._by_short_name.setdefault(short_name(name), []).append(name)
        self._graph.add_node(type_id)
        if parent_id is not None:
            self._graph.add_edge(parent_id, type_id)
        return type_id

    def register(self, name, parent=None, features=None, description=None):
        """
        Register a type and return its id.

        Registering a name a second time returns the original id.  The parent and
        features, if given again, have to match the first registration.
        parent=None means uima.tcas.Annotation.
        """
        if not name or not isinstance(name, str):
            raise TypeSystemError("Type names must be non-empty strings, got %r" % (name,))
        parent_id = self.id(ANNOTATION if parent is None else parent)
        features = tuple(_to_feature(x) for x in features) if features else ()

        if name in self._by_name:
            existing = self._descriptors[self._by_name[name]]
            if parent is not None and existing.parent_id != parent_id:
                raise TypeSystemError("Type %s is already registered with parent %s, not %s" %
                                      (name, self.name(existing.parent_id), self.name(parent_id)))
            if features and features != existing.features:
                raise TypeSystemError("Type %s is already registered with different features" % name)
            logger.debug("Type %s already registered with id %d", name, existing.type_id)
            return existing.type_id

        known = set(x.name for x in self.features(parent_id))
        seen = set()
        for feature in features:
            if feature.name in RESERVED_FEATURE_NAMES or feature.name.startswith("_"):
                raise TypeSystemError("Feature %s of %s clashes with an attribute of annotation views" % (feature.name, name))
            if feature.name in known or feature.name in seen:
                raise TypeSystemError("Feature %s is declared twice in the lineage of %s" % (feature.name, name))
            seen.add(feature.name)

        type_id = self._add_type(name, parent_id, features, description)
        logger.debug("Registered type %s with id %d (parent %s)", name, type_id, self.name(parent_id))
        return type_id

    def id(self, type_name):
        """
        Resolve a full name, an unambiguous short name, or an integer id to a type id
        """
        if isinstance(type_name, bool):
            raise UnknownTypeError(type_name)
        if isinstance(type_name, int):
            if 0 <= type_name < len(self._descriptors):
                return type_name
            raise UnknownTypeError(type_name)
        if type_name in self._by_name:
            return self._by_name[type_name]
        candidates = self._by_short_name.get(type_name)
        if not candidates:
            raise UnknownTypeError(type_name)
        if len(candidates) > 1:
            raise AmbiguousTypeError(type_name, candidates)
        return self._by_name[candidates[0]]

    def name(self, type_name):
        return self._descriptors[self.id(type_name)].name

    def descriptor(self, type_name):
        return self._descriptors[self.id(type_name)]

    def parent(self, type_name):
        """ Name of the parent type, or None for uima.cas.TOP """
        parent_id = self.descriptor(type_name).parent_id
        if parent_id is None:
            return None
        return self._descriptors[parent_id].name

    def lineage(self, type_name):
        """ Type names from uima.cas.TOP down to the given type, inclusive """
        path = nx.shortest_path(self._graph, 0, self.id(type_name))
        return [self._descriptors[x].name for x in path]

    def subsumes(self, super_type, sub_type):
        """ True if sub_type is super_type or one of its descendants """
        super_id = self.id(super_type)
        sub_id = self.id(sub_type)
        return super_id == sub_id or nx.has_path(self._graph, super_id, sub_id)

    def subtypes(self, type_name):
        """ Ids of the type and all of its descendants """
        type_id = self.id(type_name)
        return nx.descendants(self._graph, type_id) | {type_id}

    def features(self, type_name):
        """ All features of the type, inherited ones first """
        features = []
        for name in self.lineage(type_name):
            features.extend(self._descriptors[self._by_name[name]].features)
        return tuple(features)

    def feature(self, type_name, feature_name):
        for feature in self.features(type_name):
            if feature.name == feature_name:
                return feature
        raise UnknownFeatureError(self.name(type_name), feature_name)

    def validate(self):
        """
        Check that every feature range names something this catalog knows about
        """
        for descriptor in self._descriptors:
            for feature in descriptor.features:
                ranges = [feature.range]
                if feature.range in FS_COLLECTIONS and feature.element_type is not None:
                    ranges.append(feature.element_type)
                for range_name in ranges:
                    if range_name in PRIMITIVE_RANGES:
                        continue
                    if range_name not in self._by_name:
                        raise TypeSystemError("Feature %s of %s has unknown range %s" % (feature.name, descriptor.name, range_name))
        if not nx.is_tree(self._graph):
            raise TypeSystemError("Type hierarchy is not a tree")

    def __contains__(self, type_name):
        try:
            self.id(type_name)
        except UnknownTypeError:
            return False
        except AmbiguousTypeError:
            return True
        return True

    def __len__(self):
        return len(self._descriptors)

    def __iter__(self):
        return iter(self._descriptors)

    def __repr__(self):
        return "<TypeCatalog: %d types>" % len(self)
