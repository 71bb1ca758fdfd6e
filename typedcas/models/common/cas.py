"""
The annotation store: one document's text plus every annotation made over it
"""

from collections import namedtuple
from collections.abc import Sequence
import itertools
import json
import logging
import numbers
from types import MappingProxyType

import numpy as np

from typedcas.models.common.cas_object import CasObject
from typedcas.models.common.exceptions import InvalidRangeError, TypeSystemError, UnknownHandleError
from typedcas.models.common.type_catalog import ANNOTATION, BOOLEAN, BYTE, DOUBLE, FLOAT, FS_COLLECTIONS, INTEGER, LONG, PRIMITIVE_COLLECTIONS, SHORT, STRING, TOP
from typedcas.models.common.views import AnnotationView, view_class

logger = logging.getLogger('typedcas')

Annotation = namedtuple('Annotation', ['handle', 'type_id', 'begin', 'end', 'features'])

def _is_integer(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)

def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)

PRIMITIVE_CHECKS = {
    STRING:  (lambda x: isinstance(x, str), "a str"),
    INTEGER: (_is_integer, "an int"),
    LONG:    (_is_integer, "an int"),
    SHORT:   (_is_integer, "an int"),
    BYTE:    (_is_integer, "an int"),
    FLOAT:   (_is_number, "a number"),
    DOUBLE:  (_is_number, "a number"),
    BOOLEAN: (lambda x: isinstance(x, bool), "a bool"),
}

class AnnotationStore(CasObject):
    """ Holds the text of one document and an append-only index of the annotations over it.

    Records are addressed by integer handles.  Handles come from a counter shared by
    every store in the process, so a handle from one store never resolves in another.
    """

    _addresses = itertools.count(1)

    def __init__(self, text, catalog, use_existing_instance=True):
        """ Construct an empty store.

        Args:
            text: the document text that annotation offsets point into.
            catalog: the TypeCatalog used to resolve type names.
            use_existing_instance: return the same view object each time a handle is wrapped.
        """
        if not isinstance(text, str):
            raise TypeError("The text of an annotation store must be a str, not %s" % type(text).__name__)
        self._text = text
        self._catalog = catalog
        self._use_existing_instance = use_existing_instance
        self._records = {}
        self._views = {}
        self._index = None

    @property
    def text(self):
        """ Access the document text. """
        return self._text

    @property
    def catalog(self):
        """ Access the type catalog this store resolves types against. """
        return self._catalog

    @property
    def use_existing_instance(self):
        return self._use_existing_instance

    def _check_range(self, begin, end):
        if not _is_integer(begin) or not _is_integer(end):
            raise TypeError("Annotation offsets must be integers, got %r and %r" % (begin, end))
        if begin < 0 or end < begin or end > len(self._text):
            raise InvalidRangeError(begin, end, len(self._text))

    def _check_reference(self, feature, range_name, value):
        if isinstance(value, AnnotationView):
            if value.store is not self:
                raise ValueError("Feature %s can only refer to annotations of the same store" % feature.name)
            handle = value.handle
        elif _is_integer(value):
            handle = int(value)
        else:
            raise TypeError("Feature %s expects an annotation or a handle, got %r" % (feature.name, value))
        record = self._record(handle)
        if range_name is not None and not self._catalog.subsumes(range_name, record.type_id):
            raise TypeError("Feature %s expects a %s, got a %s" % (feature.name, range_name, self._catalog.name(record.type_id)))
        return handle

    def _check_feature(self, type_id, name, value):
        """ Validate one feature value and return what gets stored in the record """
        feature = self._catalog.feature(type_id, name)
        if value is None:
            return None
        check = PRIMITIVE_CHECKS.get(feature.range)
        if check is not None:
            is_valid, expected = check
            if not is_valid(value):
                raise TypeError("Feature %s expects %s, got %r" % (name, expected, value))
            return value
        if feature.range in PRIMITIVE_COLLECTIONS:
            is_valid, expected = PRIMITIVE_CHECKS[PRIMITIVE_COLLECTIONS[feature.range]]
            if isinstance(value, str) or not isinstance(value, Sequence) or not all(is_valid(x) for x in value):
                raise TypeError("Feature %s expects a sequence of values that are each %s, got %r" % (name, expected, value))
            return tuple(value)
        if feature.range in FS_COLLECTIONS:
            if isinstance(value, (str, AnnotationView)) or not isinstance(value, Sequence):
                raise TypeError("Feature %s expects a sequence of annotations, got %r" % (name, value))
            element_type = feature.element_type
            if element_type == TOP:
                element_type = None
            return tuple(self._check_reference(feature, element_type, x) for x in value)
        return self._check_reference(feature, feature.range, value)

    def create(self, type_name, begin, end, **features):
        """
        Add an annotation of the given type and return its handle.

        Nothing is stored unless the type, the offsets and every feature value are valid.
        """
        type_id = self._catalog.id(type_name)
        if not self._catalog.subsumes(ANNOTATION, type_id):
            raise TypeSystemError("%s is not an annotation type" % self._catalog.name(type_id))
        self._check_range(begin, end)
        # raises before anything is stored if a feature clashes with a view attribute
        view_class(self._catalog, type_id)
        values = {feature.name: None for feature in self._catalog.features(type_id)}
        for name, value in features.items():
            values[name] = self._check_feature(type_id, name, value)

        handle = next(AnnotationStore._addresses)
        self._records[handle] = Annotation(handle, type_id, int(begin), int(end), values)
        self._index = None
        logger.debug("Created %s [%d, %d) as handle %d", self._catalog.name(type_id), begin, end, handle)
        return handle

    def _record(self, handle):
        try:
            return self._records[handle]
        except (KeyError, TypeError):
            raise UnknownHandleError(handle) from None

    def get(self, handle):
        """ Return the Annotation record for a handle of this store.  Its features are read-only. """
        record = self._record(handle)
        return record._replace(features=MappingProxyType(record.features))

    def get_feature(self, handle, name):
        """ Read one feature.  References come back as views, arrays and lists as lists """
        record = self._record(handle)
        feature = self._catalog.feature(record.type_id, name)
        value = record.features[name]
        if value is None or feature.range in PRIMITIVE_CHECKS:
            return value
        if feature.range in PRIMITIVE_COLLECTIONS:
            return list(value)
        if feature.range in FS_COLLECTIONS:
            return [self.view(x) for x in value]
        return self.view(value)

    def set_feature(self, handle, name, value):
        record = self._record(handle)
        record.features[name] = self._check_feature(record.type_id, name, value)

    def view_class(self, type_name):
        return view_class(self._catalog, type_name)

    def view(self, handle):
        """
        Wrap a handle in the view class of its type.

        With use_existing_instance, the same handle always gives back the same object.
        """
        if self._use_existing_instance:
            existing = self._views.get(handle)
            if existing is not None:
                return existing
        record = self._record(handle)
        view = view_class(self._catalog, record.type_id)(self, handle)
        if self._use_existing_instance:
            self._views[handle] = view
        return view

    def add(self, type_name, begin, end, **features):
        """ Create an annotation and return a view of it """
        return self.view(self.create(type_name, begin, end, **features))

    def covered_text(self, handle):
        record = self._record(handle)
        return self._text[record.begin:record.end]

    def _build_index(self):
        records = sorted(self._records.values(), key=lambda x: (x.begin, -x.end, x.handle))
        self._index = (np.array([x.handle for x in records], dtype=np.int64),
                       np.array([x.type_id for x in records], dtype=np.int64),
                       np.array([x.begin for x in records], dtype=np.int64),
                       np.array([x.end for x in records], dtype=np.int64))
        return self._index

    def select(self, type_name=None, begin=None, end=None, include_subtypes=True):
        """
        Return views of the annotations lying inside [begin, end], in index order

        Index order is begin ascending, then end descending, then creation order.
        type_name=None matches every annotation type.
        """
        handles, type_ids, begins, ends = self._index if self._index is not None else self._build_index()
        mask = np.ones(len(handles), dtype=bool)
        if type_name is not None:
            if include_subtypes:
                wanted = sorted(self._catalog.subtypes(type_name))
            else:
                wanted = [self._catalog.id(type_name)]
            mask &= np.isin(type_ids, wanted)
        if begin is not None:
            mask &= begins >= begin
        if end is not None:
            mask &= ends <= end
        return [self.view(int(x)) for x in handles[mask]]

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(self.select())

    def __contains__(self, handle):
        try:
            return handle in self._records
        except TypeError:
            return False

    def to_dict(self):
        """ Dumps every annotation, in index order, into a list of dictionaries. """
        return [view.to_dict() for view in self]

    def __repr__(self):
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
