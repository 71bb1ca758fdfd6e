import logging

logger = logging.getLogger('typedcas')

def make_table(header, content, column_width=None):
    '''
    Input:
    header -> List[str]: table header
    content -> List[List[str]]: table content
    column_width -> int: table column width; set to None for dynamically calculated widths

    Output:
    table_str -> str: well-formatted string for the table
    '''
    if column_width is None:
        # dynamically decide column widths
        lens = [[len(str(h)) for h in header]]
        lens += [[len(str(x)) for x in row] for row in content]
        column_widths = [max(c)+3 for c in zip(*lens)]
    else:
        column_widths = [column_width] * len(header)
    total_width = sum(column_widths) + 1

    def make_row(row):
        return '|' + ''.join(' ' + str(item).ljust(column_widths[i] - 2) + '|' for i, item in enumerate(row)) + '\n'

    table_str = '=' * total_width + '\n'
    table_str += make_row(header)
    table_str += '-' * total_width + '\n'
    for line in content:
        table_str += make_row(line)
    table_str += '=' * total_width + '\n'
    return table_str

def set_logging_level(logging_level, verbose):
    # Check verbose for easy logging control
    if verbose == False:
        logging_level = 'ERROR'
    elif verbose == True:
        logging_level = 'INFO'

    if logging_level is None:
        # default logging level of INFO is set in typedcas.__init__
        # but the user may have set it via the logging API
        if logger.level == 0:
            logger.setLevel('INFO')
        return logger.level

    logging_level = logging_level.upper()
    all_levels = ['DEBUG', 'INFO', 'WARNING', 'WARN', 'ERROR', 'CRITICAL', 'FATAL']
    if logging_level not in all_levels:
        raise ValueError(
            f"Unrecognized logging level for pipeline: "
            f"{logging_level}. Must be one of {', '.join(all_levels)}."
        )
    logger.setLevel(logging_level)
    return logger.level
