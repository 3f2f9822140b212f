import json
import math
from collections import namedtuple

from asciinema_scenario.asciicast import AsciiCastV2Header

# Marker of the optional configuration line at the top of a scenario
HEADER_MARKER = '#! '

DEFAULT_STEP = 0.10
DEFAULT_WIDTH = 77
DEFAULT_HEIGHT = 20


class HeaderDecodeError(ValueError):
    pass


ScenarioConfig = namedtuple('ScenarioConfig', ['step', 'width', 'height'])
ScenarioConfig.__new__.__defaults__ = (DEFAULT_STEP, DEFAULT_WIDTH, DEFAULT_HEIGHT)
ScenarioConfig.__doc__ = 'Settings of a scenario conversion'
ScenarioConfig.step.__doc__ = 'Duration of one typing step in seconds'
ScenarioConfig.width.__doc__ = 'Number of columns of the terminal'
ScenarioConfig.height.__doc__ = 'Number of rows of the terminal'


def _positive(name, value, types):
    if (isinstance(value, bool) or not isinstance(value, types) or value <= 0
            or not math.isfinite(value)):
        raise HeaderDecodeError('Invalid value for "{}": {!r} (expected a positive {})'
                                .format(name, value, ' or '.join(t.__name__ for t in types)))
    return value


def has_header(line):
    return line.startswith(HEADER_MARKER)


def decode_header(line):
    """Return the ScenarioConfig described by the first line of a scenario

    If the line does not start with HEADER_MARKER the default configuration is
    returned. Raise HeaderDecodeError if the JSON object following the marker
    is not a valid configuration.
    """
    if not has_header(line):
        return ScenarioConfig()

    try:
        attributes = json.loads(line[len(HEADER_MARKER):])
    except json.JSONDecodeError as exc:
        raise HeaderDecodeError('Invalid scenario header: {}'.format(exc)) from exc

    if not isinstance(attributes, dict):
        raise HeaderDecodeError('Scenario header must be a JSON object, got: {}'
                                .format(type(attributes).__name__))

    unknown_attributes = set(attributes) - set(ScenarioConfig._fields)
    if unknown_attributes:
        raise HeaderDecodeError('Unknown attributes in scenario header: {}'
                                .format(', '.join(sorted(unknown_attributes))))

    step = _positive('step', attributes.get('step', DEFAULT_STEP), (int, float))
    width = _positive('width', attributes.get('width', DEFAULT_WIDTH), (int,))
    height = _positive('height', attributes.get('height', DEFAULT_HEIGHT), (int,))
    return ScenarioConfig(float(step), width, height)


def make_header(config):
    """Return the asciicast header record of a recording made with 'config'"""
    return AsciiCastV2Header(version=2, width=config.width, height=config.height)
