"""
Pipeline that runs registered processors over annotation stores
"""

import argparse
import collections.abc
import io
import logging

from typedcas.models.common.cas import AnnotationStore
from typedcas.models.common.descriptor import load_type_system
from typedcas.models.common.type_catalog import TypeCatalog
from typedcas.models.dkpro_types import build_dkpro_catalog
from typedcas.pipeline.processor import ProcessorRequirementsException
from typedcas.pipeline.registry import NAME_TO_PROCESSOR_CLASS, PIPELINE_NAMES
from typedcas.utils.helper_func import make_table, set_logging_level

logger = logging.getLogger('typedcas')

class PipelineRequirementsException(Exception):
    """
    Exception indicating one or more requirements failures while attempting to build a pipeline.
    Contains a ProcessorRequirementsException list.
    """

    def __init__(self, processor_req_fails):
        self._processor_req_fails = processor_req_fails
        self.build_message()

    @property
    def processor_req_fails(self):
        return self._processor_req_fails

    def build_message(self):
        err_msg = io.StringIO()
        print(*[req_fail.message for req_fail in self.processor_req_fails], sep='\n', file=err_msg)
        self.message = '\n\n' + err_msg.getvalue()

    def __str__(self):
        return self.message

def build_catalog(type_system):
    """
    A TypeCatalog is used as is, a str is read as a descriptor path, None means the DKPro types
    """
    if type_system is None:
        return build_dkpro_catalog()
    if isinstance(type_system, TypeCatalog):
        return type_system
    if isinstance(type_system, str):
        logger.debug("Loading type system from %s", type_system)
        return load_type_system(type_system)
    raise ValueError("Cannot build a type catalog from {}".format(type(type_system)))

def normalize_processor_list(processors):
    """
    Turn None, a comma separated string, or a list/tuple of names into a list of names
    """
    if processors is None:
        return list(PIPELINE_NAMES)
    if isinstance(processors, str):
        processors = [x.strip() for x in processors.split(",") if x.strip()]
    elif not isinstance(processors, (list, tuple)):
        raise ValueError("Cannot process {} as a list of processors to run".format(type(processors)))
    unknown = [x for x in processors if x not in NAME_TO_PROCESSOR_CLASS]
    if unknown:
        raise ValueError("Unknown processors: {}.  Registered processors are: {}".format(",".join(unknown), ",".join(PIPELINE_NAMES)))
    return list(processors)

class Pipeline:

    def __init__(self,
                 processors=None,
                 type_system=None,
                 logging_level=None,
                 verbose=None,
                 use_existing_instance=True,
                 **kwargs):
        # set global logging level
        set_logging_level(logging_level, verbose)

        self.catalog = build_catalog(type_system)
        self.use_existing_instance = use_existing_instance
        self.config = dict(kwargs)
        self.load_list = normalize_processor_list(processors)

        if self.load_list:
            load_table = make_table(['Processor', 'Requires', 'Provides'],
                                    [(name,
                                      ",".join(sorted(NAME_TO_PROCESSOR_CLASS[name].REQUIRES_DEFAULT)),
                                      ",".join(sorted(NAME_TO_PROCESSOR_CLASS[name].PROVIDES_DEFAULT)))
                                     for name in self.load_list])
            logger.info(f'Loading these processors:\n{load_table}')
        else:
            logger.info('No processors requested.  The pipeline will only build annotation stores.')

        # Load processors
        self.processors = {}

        pipeline_reqs_exceptions = []
        for processor_name in self.load_list:
            logger.info('Loading: ' + processor_name)
            curr_processor_config = self.filter_config(processor_name, self.config)
            logger.debug('With settings: ')
            logger.debug(curr_processor_config)
            try:
                # try to build processor, throw an exception if there is a requirements issue
                self.processors[processor_name] = NAME_TO_PROCESSOR_CLASS[processor_name](config=curr_processor_config,
                                                                                          pipeline=self)
            except ProcessorRequirementsException as e:
                # if there was a requirements issue, add it to list which will be printed at end
                pipeline_reqs_exceptions.append(e)
                # add the broken processor to the loaded processors for the sake of analyzing the validity of the
                # entire proposed pipeline, but at this point the pipeline will not be built successfully
                self.processors[processor_name] = e.err_processor

        # if there are any processor exceptions, throw an exception to indicate pipeline build failure
        if pipeline_reqs_exceptions:
            raise PipelineRequirementsException(pipeline_reqs_exceptions)

        logger.info("Done loading processors!")

    @property
    def loaded_processors(self):
        """ Processors built so far, in load order """
        return list(self.processors.values())

    @staticmethod
    def filter_config(prefix, config_dict):
        filtered_dict = {}
        for key in config_dict.keys():
            pieces = key.split('_', 1)  # split lowercase_strict to lowercase+strict
            if len(pieces) == 1:
                continue
            k, v = pieces
            if k == prefix:
                filtered_dict[v] = config_dict[key]
        return filtered_dict

    def new_cas(self, text):
        """ Build an empty AnnotationStore over the text using this pipeline's catalog """
        return AnnotationStore(text, self.catalog, use_existing_instance=self.use_existing_instance)

    def process(self, doc, processors=None):
        """
        Run the pipeline

        doc: a str, an AnnotationStore, or a list of either for bulk processing
        processors: allow for a list of processors used by this pipeline action
          can be list, tuple, set, or comma separated string
          if None, use all the processors this pipeline knows about
          the processors still run in load order
        """
        assert any([isinstance(doc, str), isinstance(doc, list),
                    isinstance(doc, AnnotationStore)]), 'input should be either str, list or AnnotationStore'

        # empty bulk process
        if isinstance(doc, list) and len(doc) == 0:
            return []

        bulk = isinstance(doc, list)
        if bulk:
            doc = [self._as_cas(x) for x in doc]
        else:
            doc = self._as_cas(doc)

        if processors is None:
            processors = self.load_list
        elif not isinstance(processors, (str, list, tuple, set)):
            raise ValueError("Cannot process {} as a list of processors to run".format(type(processors)))
        else:
            if isinstance(processors, str):
                processors = {x for x in processors.split(",")}
            else:
                processors = set(processors)
            processors = [x for x in self.load_list if x in processors]

        for processor_name in processors:
            if self.processors.get(processor_name):
                process = self.processors[processor_name].bulk_process if bulk else self.processors[processor_name].process
                doc = process(doc)
        return doc

    def _as_cas(self, doc):
        if isinstance(doc, str):
            return self.new_cas(doc)
        if not isinstance(doc, AnnotationStore):
            raise ValueError("Cannot process {}.  Expected a str or an AnnotationStore".format(type(doc)))
        if doc.catalog is not self.catalog:
            raise ValueError("AnnotationStore was built with a different type catalog than this pipeline")
        return doc

    def bulk_process(self, docs, *args, **kwargs):
        """
        Run the pipeline in bulk processing mode

        Expects a list of str or a list of AnnotationStores
        """
        return self.process(list(docs), *args, **kwargs)

    def stream(self, docs, batch_size=50, *args, **kwargs):
        """
        Go through an iterator of documents in batches, yield processed stores
        """
        if not isinstance(docs, collections.abc.Iterator):
            docs = iter(docs)
        def next_batch():
            batch = []
            for _ in range(batch_size):
                try:
                    next_doc = next(docs)
                    batch.append(next_doc)
                except StopIteration:
                    return batch
            return batch

        batch = next_batch()
        while batch:
            batch = self.bulk_process(batch, *args, **kwargs)
            for doc in batch:
                yield doc
            batch = next_batch()

    def __str__(self):
        """
        Assemble the processors in order to make a simple description of the pipeline
        """
        processors = ["%s=%s" % (x, str(self.processors[x])) for x in self.load_list if x in self.processors]
        return "<Pipeline: %s>" % ", ".join(processors)

    def __call__(self, doc, processors=None):
        return self.process(doc, processors)

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--input_file', type=str, required=True, help='Input file to read')
    parser.add_argument('--processors', type=str, default=None, help='Comma separated processors to use.  Defaults to every registered processor')
    parser.add_argument('--type_system', type=str, default=None, help='UIMA type system descriptor.  Defaults to the DKPro types')
    parser.add_argument('--logging_level', type=str, default=None, help='Logging level for the pipeline')
    args = parser.parse_args()

    with open(args.input_file, encoding="utf-8") as fin:
        text = fin.read()

    pipe = Pipeline(processors=args.processors, type_system=args.type_system, logging_level=args.logging_level)
    cas = pipe(text)

    print(repr(cas))


if __name__ == '__main__':
    main()
