from .schema_parser import load_schema_document, parse_schema_document
from .yaml_parser import YamlParser, yaml_parser

__all__ = ["YamlParser", "load_schema_document", "parse_schema_document", "yaml_parser"]
