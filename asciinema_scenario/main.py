"""Command line interface of asciinema-scenario"""

import argparse
import logging
import os
import sys

import asciinema_scenario.config
import asciinema_scenario.preview
from asciinema_scenario.asciicast import AsciiCastError
from asciinema_scenario.scenario import ScenarioError, read_scenario
from asciinema_scenario.timeline import TimelineBuilder

logger = logging.getLogger('asciinema_scenario')

USAGE = """asciinema-scenario scenario_file [-p PREVIEW_FILE] [--legacy-preview]
                          [-v] [-h]

Create an asciinema recording from a scenario file
"""

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def existing_file(path):
    if not os.path.exists(path):
        raise argparse.ArgumentTypeError('scenario file "{}" does not exist'
                                         .format(path))
    return path


def new_file(path):
    if os.path.exists(path):
        raise argparse.ArgumentTypeError('preview file "{}" already exists'
                                         .format(path))
    return path


def parse(args):
    """Parse command line arguments

    :param args: Arguments to parse
    :return: Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog='asciinema-scenario',
        description='Create asciinema videos from a text file. The recording '
                    'is written to the standard output in asciicast v2 format.',
        usage=USAGE
    )
    parser.add_argument(
        'scenario_file',
        type=existing_file,
        help='scenario to convert into an asciicast recording'
    )
    parser.add_argument(
        '-p', '--preview-file',
        type=new_file,
        metavar='PREVIEW_FILE',
        help='also render a static SVG preview of the session to PREVIEW_FILE. '
             'The file must not exist.'
    )
    parser.add_argument(
        '--legacy-preview',
        action='store_true',
        help='render the SVG preview like older versions did, with a copy of '
             'each line in the prompt color'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='increase log messages verbosity (can be repeated)'
    )
    return parser.parse_args(args)


def convert(scenario_file, output_file, preview_file=None, legacy_preview=False):
    """Write the asciicast recording of a scenario to 'output_file'

    :param scenario_file: Path of the scenario
    :param output_file: Text stream receiving the asciicast records
    :param preview_file: Optional path of the SVG preview
    :param legacy_preview: Render the SVG preview the way older versions did
    """
    lines = read_scenario(scenario_file)
    config = asciinema_scenario.config.decode_header(lines[0] if lines else '')
    logger.info('Converting {} (step: {}s, geometry: {}x{})'
                .format(scenario_file, config.step, config.width, config.height))

    header = asciinema_scenario.config.make_header(config)
    print(header.to_json_line(), file=output_file)

    builder = TimelineBuilder(config, preview=preview_file is not None)
    count = 0
    for event in builder.build(lines):
        print(event.to_json_line(), file=output_file)
        count += 1
    output_file.flush()
    logger.info('Recording ended, {} events written'.format(count))

    if preview_file is not None:
        root = asciinema_scenario.preview.render_preview(builder.preview_lines,
                                                         legacy=legacy_preview)
        asciinema_scenario.preview.save_preview(root, preview_file)
        logger.info('Rendering ended, SVG preview is {}'.format(preview_file))


def main(args=None, output_file=None):
    if args is None:
        args = sys.argv
    if output_file is None:
        output_file = sys.stdout

    args = parse(args[1:])

    console_handler = logging.StreamHandler(sys.stderr)
    console_formatter = logging.Formatter('%(message)s')
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)
    logger.setLevel(LOG_LEVELS[min(args.verbose, len(LOG_LEVELS) - 1)])

    try:
        convert(args.scenario_file, output_file, args.preview_file,
                args.legacy_preview)
    except (ValueError, ScenarioError, AsciiCastError, OSError) as exc:
        logger.error('ERROR: {}'.format(exc))
        exit_status = 1
    else:
        exit_status = 0
    finally:
        logger.removeHandler(console_handler)
        console_handler.close()

    if exit_status:
        sys.exit(exit_status)
