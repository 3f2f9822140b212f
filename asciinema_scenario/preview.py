"""Static SVG preview of a scenario

Each preview line is rendered as a 'tspan' element of a single 'text'
element, one line below the previous one. The size of the canvas does not
depend on the geometry of the terminal.
"""
import logging
import re

from lxml import etree

logger = logging.getLogger(__name__)

CANVAS_WIDTH = 824
CANVAS_HEIGHT = 623
LINE_HEIGHT = '1.2em'
MASK_ID = 'bigterminal-mask'

# CSS classes of styled segments
SEGMENT_CLASSES = {
    'prompt': 'fg-2',
    'highlight': 'fg-15',
}
# Class of the copy of each raw item appended by the legacy renderer
LEGACY_ITEM_CLASS = 'fg-2'
LEGACY_EMPTY_ITEM = '$ '

# XML namespaces
SVG_NS = 'http://www.w3.org/2000/svg'
XML_NS = 'http://www.w3.org/XML/1998/namespace'

NAMESPACES = {
    None: SVG_NS,
    'dc': 'http://purl.org/dc/elements/1.1/',
    'cc': 'http://creativecommons.org/ns#',
    'rdf': 'http://www.w3.org/1999/02/22-rdf-syntax-ns#',
}

CSS = """
    text {
        font-family: 'DejaVu Sans Mono', monospace;
        font-size: 14px;
        fill: #b9c0cb;
    }
    .background { fill: #282d35; }
    .fg-2 { fill: #a8ff60; }
    .fg-15 { fill: #ffffff; font-weight: bold; }
"""

# Terminal escape sequences: CSI, OSC and two character sequences
ESCAPE_SEQUENCE = re.compile(r'\x1b(\[[0-?]*[ -/]*[@-~]|\][^\x07\x1b]*(\x07|\x1b\\)|[@-Z\\-_])')
# Characters outside of the XML 1.0 character range
INVALID_XML_CHARACTER = re.compile(r'[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]')


def printable(text):
    """Return 'text' without terminal escape sequences and control characters
    that cannot be stored in an XML document"""
    return INVALID_XML_CHARACTER.sub('', ESCAPE_SEQUENCE.sub('', text))


def _svg(tag):
    return '{{{}}}{}'.format(SVG_NS, tag)


def _append_text(element, text):
    """Append a text node at the end of the content of 'element'"""
    text = printable(text)
    if len(element):
        last = element[-1]
        last.tail = (last.tail or '') + text
    else:
        element.text = (element.text or '') + text


def _append_span(element, text, css_class):
    span = etree.SubElement(element, _svg('tspan'), {'class': css_class})
    span.text = printable(text)
    return span


def _render_segments(tspan, preview_line):
    for segment in preview_line.segments():
        if segment.style is None:
            _append_text(tspan, segment.text)
        else:
            _append_span(tspan, segment.text, SEGMENT_CLASSES[segment.style])


def _render_legacy_items(tspan, preview_line):
    """Render a line the way the first releases of asciinema-scenario did

    Every raw item is split on its first '#' and followed by a copy of the
    whole item. An empty item stands for a bare prompt.
    """
    for item in preview_line.raw_items():
        if item == '':
            _append_text(tspan, LEGACY_EMPTY_ITEM)
            continue
        head, marker, tail = item.partition('#')
        _append_text(tspan, head)
        if marker:
            _append_span(tspan, tail, SEGMENT_CLASSES['highlight'])
        _append_span(tspan, item, LEGACY_ITEM_CLASS)


def render_preview(preview_lines, legacy=False):
    """Return the root element of the SVG preview of 'preview_lines'

    :param preview_lines: Iterable of PreviewLines
    :param legacy: Also render a copy of each raw item, as older versions did
    """
    root = etree.Element(_svg('svg'), nsmap=NAMESPACES)
    root.attrib.update({
        'version': '1.1',
        'width': '100%',
        'viewBox': '0 0 {} {}'.format(CANVAS_WIDTH, CANVAS_HEIGHT),
        'preserveAspectRatio': 'xMidYMid meet',
    })

    defs = etree.SubElement(root, _svg('defs'))
    style = etree.SubElement(defs, _svg('style'), {'type': 'text/css'})
    style.text = etree.CDATA(CSS)

    mask = etree.SubElement(root, _svg('mask'), {'id': MASK_ID})
    etree.SubElement(mask, _svg('rect'), {
        'x': '0',
        'y': '0',
        'width': str(CANVAS_WIDTH),
        'height': str(CANVAS_HEIGHT),
        'fill': '#fff',
    })
    etree.SubElement(root, _svg('rect'), {
        'class': 'background',
        'y': '0',
        'x': '0',
        'width': str(CANVAS_WIDTH),
        'height': str(CANVAS_HEIGHT),
    })

    text = etree.SubElement(root, _svg('text'), {
        'mask': 'url(#{})'.format(MASK_ID),
        'transform': 'translate(0 0)',
        'y': '0',
        'x': '0',
        '{{{}}}space'.format(XML_NS): 'preserve',
    })

    count = 0
    for preview_line in preview_lines:
        tspan = etree.SubElement(text, _svg('tspan'), {'x': '0', 'dy': LINE_HEIGHT})
        if legacy:
            _render_legacy_items(tspan, preview_line)
        else:
            _render_segments(tspan, preview_line)
        count += 1
    logger.debug('Rendered {} preview lines'.format(count))

    return root


def save_preview(root, filename):
    """Write the SVG document to 'filename'

    Raise FileExistsError if 'filename' already exists: an existing file is
    never overwritten.
    """
    with open(filename, 'xb') as output_file:
        output_file.write(etree.tostring(root))
