"""
Base classes for processors

A processor reads annotations out of an AnnotationStore and adds new ones.
It declares the annotation types it needs and the types it produces,
so a pipeline can check that every requirement is met before running.
"""

from abc import ABC, abstractmethod

from typedcas.pipeline.registry import NAME_TO_PROCESSOR_CLASS, PIPELINE_NAMES

class ProcessorRequirementsException(Exception):
    """ Exception indicating a processor's requirements will not be met """

    def __init__(self, processors_list, err_processor, provided_reqs):
        self._err_processor = err_processor
        self._processors_list = processors_list
        self._provided_reqs = provided_reqs
        self.build_message()

    @property
    def err_processor(self):
        """ The processor that raised the exception """
        return self._err_processor

    @property
    def processor_type(self):
        return type(self.err_processor).__name__

    @property
    def processors_list(self):
        return self._processors_list

    @property
    def provided_reqs(self):
        return self._provided_reqs

    @property
    def missing_reqs(self):
        return self.err_processor.missing_requirements(self.provided_reqs)

    def build_message(self):
        self.message = (f"---\nPipeline Requirements Error!\n"
                        f"\tProcessor: {self.processor_type}\n"
                        f"\tPipeline processors list: {','.join(self.processors_list)}\n"
                        f"\tProcessor Requirements: {sorted(self.err_processor.requires)}\n"
                        f"\t\t- missing: {sorted(self.missing_reqs)}\n"
                        f"\nThe processors list provided for this pipeline is invalid.  Please make sure every "
                        f"required annotation type is provided by an earlier processor.\n\n")

    def __str__(self):
        return self.message


class Processor(ABC):
    """ Base class for all processors """

    # annotation type names, resolved against the pipeline's catalog
    REQUIRES_DEFAULT = set()
    PROVIDES_DEFAULT = set()

    def __init__(self, config, pipeline):
        # overall config for the processor
        self._config = config
        # pipeline building this processor (presently processors are only meant to exist in one pipeline)
        self._pipeline = pipeline
        # set up what annotations are required based on config
        self._set_up_requires()
        # set up what annotations are provided based on config
        self._set_up_provides()
        # given pipeline constructing this processor, check if requirements are met, throw exception if not
        self._check_requirements()

    def __str__(self):
        return self.__class__.__name__

    @abstractmethod
    def process(self, cas):
        """ Process an AnnotationStore.  This is the main method of a processor. """
        pass

    def bulk_process(self, cases):
        """ Process a list of AnnotationStores. This should be replaced with a more efficient implementation if possible. """
        return [self.process(cas) for cas in cases]

    def _resolve_types(self, type_names):
        catalog = self.pipeline.catalog
        return set(catalog.name(x) for x in type_names)

    def _set_up_provides(self):
        """ Set up what annotation types this processor adds.  Default is to use a class defined set. """
        self._provides = self._resolve_types(self.__class__.PROVIDES_DEFAULT)

    def _set_up_requires(self):
        """ Set up what annotation types this processor needs.  Default is to use a class defined set. """
        self._requires = self._resolve_types(self.__class__.REQUIRES_DEFAULT)

    @property
    def config(self):
        """ Configurations for the processor """
        return self._config

    @property
    def pipeline(self):
        """ The pipeline that this processor belongs to """
        return self._pipeline

    @property
    def provides(self):
        return self._provides

    @property
    def requires(self):
        return self._requires

    def missing_requirements(self, provided_reqs):
        """ Required types for which nothing provided is the type itself or one of its subtypes """
        catalog = self.pipeline.catalog
        return set(required for required in self.requires
                   if not any(catalog.subsumes(required, provided) for provided in provided_reqs))

    def _check_requirements(self):
        """ Given a list of fulfilled requirements, check if all of this processor's requirements are met or not. """
        provided_reqs = set.union(*[processor.provides for processor in self.pipeline.loaded_processors]+[set([])])
        if self.missing_requirements(provided_reqs):
            load_names = list(self.pipeline.load_list)
            raise ProcessorRequirementsException(load_names, self, provided_reqs)


class ProcessorRegisterException(Exception):
    """ Exception indicating processor or processor registration failure """

    def __init__(self, processor_class, expected_parent):
        self._processor_class = processor_class
        self._expected_parent = expected_parent
        self.build_message()

    def build_message(self):
        self.message = f"Failed to register '{self._processor_class}'. It must be a subclass of '{self._expected_parent}'."

    def __str__(self):
        return self.message

def register_processor(name):
    def wrapper(Cls):
        if not isinstance(Cls, type) or not issubclass(Cls, Processor):
            raise ProcessorRegisterException(Cls, Processor)

        NAME_TO_PROCESSOR_CLASS[name] = Cls
        if name not in PIPELINE_NAMES:
            PIPELINE_NAMES.append(name)
        return Cls
    return wrapper
