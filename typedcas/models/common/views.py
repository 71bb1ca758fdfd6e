"""
Typed views over annotation records

A view is a thin (store, handle) pair.  All of the data lives in the store;
the view only knows which record it points at.  Each annotation type in a
catalog gets its own view class, built on first use, whose Python base
classes follow the type hierarchy.
"""

import json

from typedcas.models.common.cas_object import CasObject
from typedcas.models.common.exceptions import TypeSystemError
from typedcas.models.common.type_catalog import ANNOTATION, short_name

class AnnotationView(CasObject):
    """ A view of one annotation.  Subclasses built by view_class() are bound to a type. """

    TYPE_NAME = ANNOTATION
    TYPE_ID = None
    CATALOG = None

    def __init__(self, store, handle):
        """ Wrap an existing handle.  The handle is trusted, so no lookup happens here. """
        self._store = store
        self._handle = handle

    @classmethod
    def create(cls, store, begin, end, **features):
        """ Create a new annotation of this class's type in the store and return its view """
        handle = store.create(cls.TYPE_NAME, begin, end, **features)
        return store.view(handle)

    @property
    def store(self):
        """ Access the store that owns the annotation. """
        return self._store

    @property
    def handle(self):
        """ Access the handle of the annotation in its store. """
        return self._handle

    @property
    def begin(self):
        """ Access the start character offset. """
        return self._store.get(self._handle).begin

    @property
    def end(self):
        """ Access the end character offset, exclusive. """
        return self._store.get(self._handle).end

    @property
    def type_id(self):
        return self._store.get(self._handle).type_id

    @property
    def type_name(self):
        return self._store.catalog.name(self.type_id)

    @property
    def text(self):
        """ Access the text covered by the annotation. Example: 'not' """
        return self._store.covered_text(self._handle)

    def get_feature(self, name):
        return self._store.get_feature(self._handle, name)

    def set_feature(self, name, value):
        self._store.set_feature(self._handle, name, value)

    def features(self):
        """ Dictionary of every feature of the type, unset ones as None """
        return {feature.name: self.get_feature(feature.name) for feature in self._store.catalog.features(self.type_id)}

    def is_a(self, type_name):
        """ Is this annotation's type the given type or one of its subtypes? """
        return self._store.catalog.subsumes(type_name, self.type_id)

    def __eq__(self, other):
        if not isinstance(other, AnnotationView):
            return NotImplemented
        return self._store is other._store and self._handle == other._handle

    def __hash__(self):
        return hash((id(self._store), self._handle))

    def to_dict(self):
        """ Dumps the annotation into a dictionary.  References are written as handles. """
        record = self._store.get(self._handle)
        features = {}
        for name, value in record.features.items():
            if value is None:
                continue
            features[name] = list(value) if isinstance(value, tuple) else value
        view_dict = {'handle': self._handle,
                     'type': self.type_name,
                     'begin': record.begin,
                     'end': record.end,
                     'text': self.text}
        if features:
            view_dict['features'] = features
        return view_dict

    def __repr__(self):
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def pretty_print(self):
        """ Print the annotation in one line. """
        view_dict = self.to_dict()
        view_dict.pop('features', None)
        feature_str = ";".join(["{}={}".format(k, v) for k, v in view_dict.items()])
        return f"<{self.__class__.__name__} {feature_str}>"


def _feature_property(name):
    def getter(self):
        return self._store.get_feature(self._handle, name)
    def setter(self, value):
        self._store.set_feature(self._handle, name, value)
    return getter, setter

def view_class(catalog, type_name):
    """
    Return the view class for an annotation type, building it (and its parents) on first use

    The class is named after the short type name and carries TYPE_NAME, TYPE_ID and CATALOG.
    Each declared feature becomes a property with a getter and a validating setter.
    """
    classes = catalog.view_classes
    type_id = catalog.id(type_name)
    if type_id in classes:
        return classes[type_id]

    descriptor = catalog.descriptor(type_id)
    if descriptor.name == ANNOTATION:
        parent_class = AnnotationView
    elif catalog.subsumes(ANNOTATION, type_id):
        parent_class = view_class(catalog, descriptor.parent_id)
    else:
        raise TypeSystemError("%s is not an annotation type, so it has no view class" % descriptor.name)

    cls = type(short_name(descriptor.name), (parent_class,),
               {'TYPE_NAME': descriptor.name,
                'TYPE_ID': type_id,
                'CATALOG': catalog,
                '__doc__': descriptor.description,
                '__module__': __name__})
    for feature in descriptor.features:
        getter, setter = _feature_property(feature.name)
        try:
            cls.add_property(feature.name, getter=getter, setter=setter, doc=feature.description)
        except ValueError as e:
            raise TypeSystemError("Feature %s of %s clashes with an existing view attribute" % (feature.name, descriptor.name)) from e
    classes[type_id] = cls
    return cls
