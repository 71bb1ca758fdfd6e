# these two get filled by register_processor
# PIPELINE_NAMES keeps registration order, which is the default run order
NAME_TO_PROCESSOR_CLASS = dict()
PIPELINE_NAMES = []
