#!/usr/bin/env python3
"""
Strapi Type Generator
Generates plain TypeScript interfaces for a frontend from Strapi's generated content types
"""
import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, NamedTuple

import typer

# Schema.Attribute marker tokens
ENUMERATION_MARKER = 'Schema.Attribute.Enumeration'
RELATION_MARKER = 'Schema.Attribute.Relation'
JSON_MARKER = 'Schema.Attribute.JSON'
PRIVATE_MARKER = 'Schema.Attribute.Private'
REQUIRED_MARKER = 'Schema.Attribute.Required'

# Scalar markers, checked in order (first hit wins)
SCALAR_TYPE_MAP = {
    'Schema.Attribute.String': 'string',
    'Schema.Attribute.Email': 'string',
    'Schema.Attribute.Password': 'string',
    'Schema.Attribute.Text': 'string',
    'Schema.Attribute.Integer': 'number',
    'Schema.Attribute.BigInteger': 'number',
    'Schema.Attribute.Decimal': 'number',
    'Schema.Attribute.Boolean': 'boolean',
    'Schema.Attribute.DateTime': 'string',
}

# Relation kinds rendered as arrays of the target type
TO_MANY_RELATIONS = {'oneToMany', 'manyToMany'}

JSON_ARRAY_DEFAULTS = ("DefaultTo<'[]'>", 'DefaultTo<[]>')
RECORD_TYPE = 'Record<string, any>'
ARRAY_TYPE = 'any[]'
FALLBACK_TYPE = 'any'

# Bracket kinds tracked while joining continuation lines
BRACKET_PAIRS = (('<', '>'), ('{', '}'), ('[', ']'))

# Regex patterns for parsing
re_interface = re.compile(r'export interface (\w+)[^{]*\{([\s\S]*?)\n\}')
re_attributes_open = re.compile(r'attributes:\s*\{')
re_attributes_block = re.compile(r'attributes:\s*\{([\s\S]*?)\s*\};?\s*$', re.MULTILINE)
re_attribute_start = re.compile(r'^(\w+):\s*(.*)')
re_enumeration = re.compile(r'Enumeration<\s*\[([^\]]+)\]\s*>')
re_relation = re.compile(r"Relation<'([^']+)',\s*'([^']+)'")
re_union_separator = re.compile(r',\s*')
re_name_separator = re.compile(r'[-.]')
re_whitespace = re.compile(r'\s+')


# Data structures
class Attribute(NamedTuple):
    name: str
    ts_type: str
    required: bool = False


class ParsedInterface(NamedTuple):
    name: str
    attributes: tuple


class GeneratorConfig:
    def __init__(self, backend_path, frontend_path, report=False):
        self.backend_path = Path(backend_path)
        self.frontend_path = Path(frontend_path)
        self.report = report


def read_file(p):
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(f'Backend types file not found: {p}')
    return p.read_text(encoding='utf-8')


def write_file(p, text):
    """Write text to p, creating parent directories as needed."""
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding='utf-8')


def convert_type_name_to_pascal_case(type_name: str) -> str:
    """Turn a Strapi UID such as 'api::article.article' into 'ApiArticleArticle'."""
    words = []
    for part in type_name.split('::'):
        for word in re_name_separator.split(part):
            words.append(word[:1].upper() + word[1:])
    return ''.join(words)


def _transform_enumeration(attribute_type):
    m = re_enumeration.search(attribute_type)
    if not m:
        return 'string'
    values = re_whitespace.sub(' ', m.group(1))
    return re_union_separator.sub(' | ', values).strip()


def _transform_relation(attribute_type):
    m = re_relation.search(attribute_type)
    if not m:
        return FALLBACK_TYPE
    relation_kind, target = m.group(1), m.group(2)
    type_name = convert_type_name_to_pascal_case(target)
    if relation_kind in TO_MANY_RELATIONS:
        return f'{type_name}[]'
    return type_name


def _transform_json(attribute_type):
    if any(token in attribute_type for token in JSON_ARRAY_DEFAULTS):
        return ARRAY_TYPE
    # Object default, unrecognized default or none at all
    return RECORD_TYPE


def transform_attribute_type(attribute_type: str) -> str:
    """Map a cleaned Strapi attribute type expression to a TypeScript type.

    Markers are probed as substrings of the whole expression, so they may sit
    anywhere in an intersection (``A & B & C``). Rules, first hit wins:

    - Enumeration -> union of its literals (``"a" | "b"``), or ``string``
      when the literal list cannot be found.
    - Relation -> PascalCase target name, suffixed with ``[]`` for
      oneToMany/manyToMany; ``any`` when the kind/target pair is missing.
    - JSON -> ``any[]`` for an array default, otherwise ``Record<string, any>``.
    - Scalars from SCALAR_TYPE_MAP.
    - Anything else -> ``any``.
    """
    if ENUMERATION_MARKER in attribute_type:
        return _transform_enumeration(attribute_type)
    if RELATION_MARKER in attribute_type:
        return _transform_relation(attribute_type)
    if JSON_MARKER in attribute_type:
        return _transform_json(attribute_type)
    for marker, ts_type in SCALAR_TYPE_MAP.items():
        if marker in attribute_type:
            return ts_type
    return FALLBACK_TYPE


def _bracket_balance(text):
    return [text.count(o) - text.count(c) for o, c in BRACKET_PAIRS]


def clean_attribute_type(attribute_type: str) -> str:
    if attribute_type.endswith(';'):
        attribute_type = attribute_type[:-1]
    return re_whitespace.sub(' ', attribute_type).strip()


def parse_attributes(attributes_content: str) -> list:
    """Parse the body of an ``attributes: { ... }`` block into Attributes.

    A declaration may continue over several lines; lines are joined until the
    text ends with ';' and no '<', '{' or '[' is left open. Private attributes
    are dropped.
    """
    lines = [line.strip() for line in attributes_content.split('\n')]
    lines = [line for line in lines if line]

    attributes = []
    i = 0
    while i < len(lines):
        m = re_attribute_start.match(lines[i])
        if not m or not m.group(2):
            # Not the start of a declaration
            i += 1
            continue
        name = m.group(1)
        attr_type = m.group(2)
        balance = _bracket_balance(attr_type)
        i += 1

        while i < len(lines) and (not attr_type.endswith(';') or any(n > 0 for n in balance)):
            next_line = lines[i]
            attr_type += ' ' + next_line
            balance = [a + b for a, b in zip(balance, _bracket_balance(next_line))]
            i += 1

        attr_type = clean_attribute_type(attr_type)
        if PRIVATE_MARKER in attr_type:
            continue

        attributes.append(Attribute(
            name=name,
            ts_type=transform_attribute_type(attr_type),
            required=REQUIRED_MARKER in attr_type,
        ))
    return attributes


def extract_attributes_block(interface_content):
    """Return the text inside ``attributes: { ... }``, or None if there is none."""
    m = re_attributes_open.search(interface_content)
    if not m:
        return None
    depth = 1
    quote = None
    escaped = False
    for idx in range(m.end(), len(interface_content)):
        ch = interface_content[idx]
        if quote:
            # Braces inside string literals (e.g. DefaultTo<'}'>) do not count
            if escaped:
                escaped = False
            elif ch == '\\':
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in ('"', "'"):
            quote = ch
        elif ch == '{':
            depth += 1
        elif ch == '}':
            depth -= 1
            if depth == 0:
                content = interface_content[m.end():idx]
                return content if content.strip() else None
    # Unbalanced: settle for the first closing brace that ends a line
    fallback = re_attributes_block.search(interface_content)
    if fallback and fallback.group(1):
        return fallback.group(1)
    return None


def extract_interfaces(source: str):
    """Yield (interface name, attributes block text) for each exported interface."""
    for m in re_interface.finditer(source):
        name, content = m.group(1), m.group(2)
        if not content:
            continue
        attributes_content = extract_attributes_block(content)
        if attributes_content is None:
            # Auxiliary interface (no attributes), e.g. ContentTypeSchemas
            continue
        yield name, attributes_content


def parse_interfaces(source: str) -> list:
    interfaces = []
    for name, attributes_content in extract_interfaces(source):
        attributes = parse_attributes(attributes_content)
        if attributes:
            interfaces.append(ParsedInterface(name, tuple(attributes)))
    return interfaces


def render_interface(iface: ParsedInterface) -> str:
    props = []
    for attr in iface.attributes:
        optional = '' if attr.required else '?'
        props.append(f'  {attr.name}{optional}: {attr.ts_type};')
    return f'export interface {iface.name} {{\n' + '\n'.join(props) + '\n}'


def render_interfaces(interfaces) -> str:
    return '\n\n'.join(render_interface(iface) for iface in interfaces)


def build_report(interfaces, config):
    """Return the generation report as (report dict, text rendering)."""
    attributes = [(iface.name, attr) for iface in interfaces for attr in iface.attributes]
    required = sum(1 for _, attr in attributes if attr.required)
    report = {
        'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        'backend_path': str(config.backend_path),
        'frontend_path': str(config.frontend_path),
        'counts': {
            'interfaces': len(interfaces),
            'attributes': len(attributes),
            'required': required,
            'optional': len(attributes) - required,
        },
        'untyped_attributes': [
            {'interface': iface_name, 'name': attr.name}
            for iface_name, attr in attributes
            if attr.ts_type == FALLBACK_TYPE
        ],
    }
    txt_lines = [
        f"Report generated: {report['timestamp']}",
        f"Backend types: {report['backend_path']}",
        f"Frontend types: {report['frontend_path']}",
    ]
    for k, v in report['counts'].items():
        txt_lines.append(f'{k}: {v}')
    if report['untyped_attributes']:
        txt_lines.append('')
        txt_lines.append(f'Attributes typed as {FALLBACK_TYPE} (unrecognized schema type):')
        for item in report['untyped_attributes']:
            txt_lines.append(f"- {item['interface']}.{item['name']}")
    return report, '\n'.join(txt_lines)


def write_report(report, report_text, config):
    """Write the report (JSON + text) next to the frontend types file."""
    json_path = config.frontend_path.with_suffix('.report.json')
    txt_path = config.frontend_path.with_suffix('.report.txt')
    print(f'Writing report {json_path} and {txt_path}...')
    json_path.write_text(json.dumps(report, indent=2), encoding='utf-8')
    txt_path.write_text(report_text, encoding='utf-8')


def generate_types(config: GeneratorConfig) -> list:
    """Read the backend content types, write the frontend interfaces.

    Parsing, rendering and report building all finish before anything is
    written, so a failure in any of them leaves existing output untouched.
    """
    print(f'Reading backend types from: {config.backend_path}')
    print(f'Writing frontend types to: {config.frontend_path}')

    backend_content = read_file(config.backend_path)
    interfaces = parse_interfaces(backend_content)
    output = render_interfaces(interfaces)
    report = build_report(interfaces, config) if config.report else None

    write_file(config.frontend_path, output)
    if report:
        write_report(*report, config)
    return interfaces


app = typer.Typer(
    name='strapi-typegen',
    help='Generate TypeScript interfaces for frontend from Strapi content types.',
    add_completion=False,
    context_settings={'help_option_names': ['-h', '--help']},
)


@app.command()
def generate(
    backend_path: Annotated[Path, typer.Argument(
        help='Path to Strapi generated content types (e.g. backend/types/generated/contentTypes.d.ts).')],
    frontend_path: Annotated[Path, typer.Argument(
        help='Path to output frontend types (e.g. frontend/src/types/strapi.ts).')],
    report: Annotated[bool, typer.Option(
        '--report', help='Also write a .report.json/.report.txt summary next to the output.')] = False,
) -> None:
    """Generate TypeScript interfaces for frontend from Strapi content types."""
    config = GeneratorConfig(backend_path, frontend_path, report=report)
    try:
        interfaces = generate_types(config)
    except Exception as error:
        typer.echo(f'Error generating types: {error}', err=True)
        raise typer.Exit(code=1)
    typer.echo(f'Generated {len(interfaces)} interfaces in {config.frontend_path}')


def main():
    app()


if __name__ == '__main__':
    main()
