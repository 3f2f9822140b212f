"""asciicast records

This module provides the records written by asciinema-scenario. Only the v2
format is supported, both for encoding and for decoding. The specification of
the format is available here:
    https://github.com/asciinema/asciinema/blob/develop/doc/asciicast-v2.md
"""
import abc
import json
from collections import namedtuple

# Compact separators, as written by asciinema itself
JSON_SEPARATORS = (',', ':')

# Event type for data written to the standard output of the terminal
OUTPUT = 'o'


class AsciiCastError(Exception):
    pass


def _dumps(obj):
    try:
        return json.dumps(obj, ensure_ascii=False, separators=JSON_SEPARATORS)
    except (TypeError, ValueError) as exc:
        raise AsciiCastError('Unable to encode record: {}'.format(obj)) from exc


class AsciiCastV2Record(abc.ABC):
    """Generic Asciicast v2 record format"""
    @abc.abstractmethod
    def to_json_line(self):
        raise NotImplementedError

    @classmethod
    def from_json_line(cls, line):
        """Raise AsciiCastError if line is not a valid asciicast v2 record"""
        try:
            json_obj = json.loads(line)
        except json.JSONDecodeError as exc:
            raise AsciiCastError from exc
        if isinstance(json_obj, dict):
            return AsciiCastV2Header.from_json_line(line)
        if isinstance(json_obj, list):
            return AsciiCastV2Event.from_json_line(line)
        truncated_line = line if len(line) < 20 else '{}...'.format(line[:20])
        raise AsciiCastError('Unknown record type: "{}"'.format(truncated_line))


_AsciiCastV2Header = namedtuple('AsciiCastV2Header', ['version', 'width', 'height',
                                                      'timestamp', 'duration',
                                                      'idle_time_limit', 'command',
                                                      'title', 'env'])
_AsciiCastV2Header.__new__.__defaults__ = (None, None, None, None, None, None)


class AsciiCastV2Header(AsciiCastV2Record, _AsciiCastV2Header):
    """Header record

    version: Version of the asciicast file format
    width: Initial number of columns of the terminal
    height: Initial number of lines of the terminal
    timestamp: Unix timestamp of the beginning of the recording
    duration: Duration of the whole recording in seconds
    idle_time_limit: Maximum idle time between two events in seconds
    command: Command that was recorded
    title: Title of the recording
    env: Mapping of environment variables captured during the recording
    """
    types = {
        'version': int,
        'width': int,
        'height': int,
        'timestamp': (type(None), int),
        'duration': (type(None), int, float),
        'idle_time_limit': (type(None), int, float),
        'command': (type(None), str),
        'title': (type(None), str),
        'env': (type(None), dict),
    }

    def __new__(cls, *args, **kwargs):
        self = super(AsciiCastV2Header, cls).__new__(cls, *args, **kwargs)
        for attr_name in cls._fields:
            attr = self.__getattribute__(attr_name)
            if isinstance(attr, bool) or not isinstance(attr, cls.types[attr_name]):
                raise AsciiCastError('Invalid type for attribute {}: {} (expected one of {})'
                                     .format(attr_name, type(attr), cls.types[attr_name]))
        if self.version != 2:
            raise AsciiCastError('Only asciicast v2 format is supported')
        return self

    def to_json_line(self):
        attributes = {name: value for name, value in self._asdict().items()
                      if value is not None}
        return _dumps(attributes)

    @classmethod
    def from_json_line(cls, line):
        try:
            attributes = json.loads(line)
        except json.JSONDecodeError as exc:
            raise AsciiCastError from exc
        filtered_attributes = {attr: attributes.get(attr) for attr in cls._fields}
        return cls(**filtered_attributes)


_AsciiCastV2Event = namedtuple('AsciiCastV2Event', ['time', 'event_type', 'event_data'])


class AsciiCastV2Event(AsciiCastV2Record, _AsciiCastV2Event):
    """Event record

    time: Time elapsed since the beginning of the recording in seconds
    event_type: Type 'o' if the data was written to the standard output of
                the terminal, type 'i' if it was read from the standard input
    event_data: Data written or read
    """
    types = {
        'time': (int, float),
        'event_type': (str,),
        'event_data': (str,),
    }

    def __new__(cls, *args, **kwargs):
        self = super(AsciiCastV2Event, cls).__new__(cls, *args, **kwargs)
        for attr_name in AsciiCastV2Event._fields:
            attr = self.__getattribute__(attr_name)
            if isinstance(attr, bool) or not isinstance(attr, cls.types[attr_name]):
                raise AsciiCastError('Invalid type for attribute {}: {} (expected one of {})'
                                     .format(attr_name, type(attr), cls.types[attr_name]))
        return self

    def to_json_line(self):
        return _dumps([self.time, self.event_type, self.event_data])

    @classmethod
    def from_json_line(cls, line):
        try:
            time, event_type, event_data = json.loads(line)
        except (json.JSONDecodeError, ValueError) as exc:
            raise AsciiCastError from exc

        return cls(time, event_type, event_data)


def output_event(time, data):
    """Return an event for data written to the terminal at 'time'"""
    return AsciiCastV2Event(time, OUTPUT, data)
