from typedcas.pipeline.core import Pipeline
from typedcas.models.common.cas import AnnotationStore
from typedcas.models.common.type_catalog import TypeCatalog
from typedcas.models.common.views import AnnotationView, view_class
from typedcas.models.common.descriptor import load_type_system, parse_type_system
from typedcas.models.dkpro_types import build_dkpro_catalog
from typedcas._version import __version__

import logging
logger = logging.getLogger('typedcas')

# if the client application hasn't set the log level, we set it
# ourselves to INFO
if logger.level == 0:
    logger.setLevel(logging.INFO)

log_handler = logging.StreamHandler()
log_formatter = logging.Formatter(fmt="%(asctime)s %(levelname)s: %(message)s",
                              datefmt='%Y-%m-%d %H:%M:%S')
log_handler.setFormatter(log_formatter)

# also, if the client hasn't added any handlers for this logger
# (or a default handler), we add a handler of our own
#
# client can later do
#   logger.removeHandler(typedcas.log_handler)
if not logger.hasHandlers():
    logger.addHandler(log_handler)
