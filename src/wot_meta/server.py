import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .logging_utils import configure_logging, get_logger
from .registry import ComponentRegistry

logger = get_logger(__name__)

TOOLS = {
    'list_components': {
        'description': 'List Wot UI component tags',
        'input_schema': {'type': 'object', 'properties': {}, 'required': []}
    },
    'get_component': {
        'description': 'Get the full metadata record for a component tag',
        'input_schema': {'type': 'object', 'properties': {'name': {'type': 'string'}}, 'required': ['name']}
    },
    'get_component_props': {
        'description': 'Return the props of a component tag',
        'input_schema': {'type': 'object', 'properties': {'name': {'type': 'string'}}, 'required': ['name']}
    },
    'search_components': {
        'description': 'Search component tags by substring',
        'input_schema': {'type': 'object', 'properties': {'query': {'type': 'string'}}, 'required': ['query']}
    },
    'find_attribute': {
        'description': 'Resolve an attribute or event on a tag, accepting kebab-case or camelCase spellings',
        'input_schema': {
            'type': 'object',
            'properties': {'name': {'type': 'string'}, 'attr': {'type': 'string'}, 'event': {'type': 'boolean'}},
            'required': ['name', 'attr'],
        }
    },
}


def rpc_result(id_: Any, result: Any):
    return {'jsonrpc': '2.0', 'id': id_, 'result': result}


def rpc_error(id_: Any, code: int, message: str):
    return {'jsonrpc': '2.0', 'id': id_, 'error': {'code': code, 'message': message}}


class ToolServer:
    def __init__(self, registry: ComponentRegistry, *, pretty: bool = False, color: bool = False):
        self.registry = registry
        self.pretty = pretty
        self.color = color

    def ensure_loaded(self) -> ComponentRegistry:
        if not self.registry.loaded:
            if self.registry.online:
                # one network attempt per page, all pages in flight at once
                asyncio.run(self.registry.load_async())
            else:
                self.registry.load()
        return self.registry

    def handle_list_components(self, params: Dict[str, Any]):
        return self.ensure_loaded().tags()

    def handle_get_component(self, params: Dict[str, Any]):
        name = params.get('name')
        if not name:
            return {'error': 'Component name not provided in arguments'}
        meta = self.ensure_loaded().get(name)
        if meta is None:
            return {'error': f'Component {name} not found'}
        result = meta.to_dict()
        result['docUrl'] = meta.doc_url
        return result

    def handle_get_component_props(self, params: Dict[str, Any]):
        name = params.get('name')
        if not name:
            return {'error': 'Component name not provided in arguments'}
        meta = self.ensure_loaded().get(name)
        if meta is None:
            return {'error': f'Component {name} not found'}
        props = [p.to_dict() for p in meta.props]
        return {'component': meta.name, 'props': props, 'count': len(props)}

    def handle_search_components(self, params: Dict[str, Any]):
        query = params.get('query') or ''
        return [meta.name for meta in self.ensure_loaded().search(query)]

    def handle_find_attribute(self, params: Dict[str, Any]):
        name, attr = params.get('name'), params.get('attr')
        if not name or not attr:
            return {'error': 'Both name and attr are required'}
        registry = self.ensure_loaded()
        if name not in registry:
            return {'error': f'Component {name} not found'}
        if params.get('event'):
            found = registry.find_event(name, attr)
            return found.to_entry_dict() if found else {'error': f'Event {attr} not found on {name}'}
        found = registry.find_prop(name, attr)
        if found:
            return found.to_dict()
        found = registry.find_external_class(name, attr)
        if found:
            return found.to_entry_dict()
        return {'error': f'Attribute {attr} not found on {name}'}

    def process_tool_call(self, tool_name: str, arguments: Dict[str, Any]):
        handler = getattr(self, f'handle_{tool_name}', None)
        if handler is None:
            return {'error': f'Tool {tool_name} not implemented'}
        return handler(arguments)

    def process_request(self, req: Dict[str, Any]):
        method = req.get('method')
        id_ = req.get('id')
        if method == 'tools/list':
            tools_meta = []
            for name, meta in TOOLS.items():
                tools_meta.append({'name': name, 'description': meta['description'], 'input_schema': meta['input_schema']})
            return rpc_result(id_, {'tools': tools_meta})
        if method == 'tools/call':
            params = req.get('params') or {}
            if not isinstance(params, dict):
                return rpc_error(id_, -32602, 'Invalid params')
            tool_name = params.get('name')
            arguments = params.get('arguments') or {}
            if not isinstance(arguments, dict):
                return rpc_error(id_, -32602, 'Invalid params')
            if not isinstance(tool_name, str) or tool_name not in TOOLS:
                return rpc_error(id_, -32601, f'Unknown tool {tool_name}')
            try:
                result = self.process_tool_call(tool_name, arguments)
                return rpc_result(id_, {'content': result})
            except Exception as e:
                logger.exception('tool %s failed', tool_name)
                return rpc_error(id_, -32603, f'Internal error: {e}')
        return rpc_error(id_, -32601, f'Unknown method {method}')

    def format(self, obj: Dict[str, Any]) -> str:
        if self.pretty:
            text = json.dumps(obj, ensure_ascii=False, indent=2)
        else:
            text = json.dumps(obj, ensure_ascii=False)
        if self.color:
            # errors red, results green
            text = ('\x1b[31m' if 'error' in obj else '\x1b[32m') + text + '\x1b[0m'
        return text

    def emit(self, obj: Dict[str, Any]):
        sys.stdout.write(self.format(obj) + '\n')
        sys.stdout.flush()

    def handle_line(self, line: str) -> Optional[Dict[str, Any]]:
        line = line.strip()
        if not line:
            return None
        try:
            req = json.loads(line)
        except json.JSONDecodeError as e:
            return rpc_error(None, -32700, f'Parse error: {e}')
        if not isinstance(req, dict):
            return rpc_error(None, -32600, 'Invalid request')
        return self.process_request(req)

    def serve(self, stream=None):
        for line in (stream if stream is not None else sys.stdin):
            logger.debug('raw_line=%r', line)
            resp = self.handle_line(line)
            if resp is not None:
                self.emit(resp)


def main(argv=None):
    import argparse
    import os
    parser = argparse.ArgumentParser(description='Wot UI component metadata server')
    parser.add_argument('--once', help='Provide a single JSON-RPC request string to process then exit')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging to stderr')
    parser.add_argument('--pretty', action='store_true', help='Pretty-print JSON output')
    parser.add_argument('--color', action='store_true', help='Colorize output (ANSI)')
    parser.add_argument('--online', action='store_true',
                        help=('Fetch hosted documentation pages, falling back to bundled copies. '
                              'Only a sample of pages is bundled; without this flag the rest load as empty records'))
    parser.add_argument('--docs-dir', type=Path, help='Directory holding <component>.md documents')
    args = parser.parse_args(argv)
    debug = args.debug or bool(os.environ.get('WOT_META_DEBUG'))
    pretty = args.pretty or bool(os.environ.get('WOT_META_PRETTY'))
    configure_logging(verbose=debug)

    registry = ComponentRegistry(online=args.online, docs_dir=args.docs_dir)
    server = ToolServer(registry, pretty=pretty, color=args.color)

    if args.once:
        logger.debug('raw_once=%s', args.once)
        resp = server.handle_line(args.once)
        if resp is not None:
            server.emit(resp)
        return

    server.serve()


if __name__ == '__main__':
    main()
