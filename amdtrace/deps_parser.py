"""
Static extraction of AMD dependency requests from JavaScript source.

Uses tree-sitter with the JavaScript grammar, so requests inside strings
or comments are never picked up and syntax errors only lose the broken
region instead of the whole file.
"""

import logging
import re
from typing import Iterator, List, NamedTuple, Optional, Tuple

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

logger = logging.getLogger(__name__)

# Provided by the loader itself; there is no file behind them
SPECIAL_DEPS = {"require", "exports", "module"}

AMD_CALLEES = {"define", "require", "requirejs"}

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}

# Nodes that may appear as the factory/callback argument
_FACTORY_TYPES = {"function", "function_expression", "arrow_function", "object"}

# Lazy-loaded parser
_parser: Optional[Parser] = None


class DepsResult(NamedTuple):
    """Dependency requests found in one source file."""
    
    deps: List[str]
    # True when some request was computed at runtime and could not be read
    incomplete_analysis: bool = False


def get_javascript_parser() -> Parser:
    """Get or create the JavaScript parser."""
    global _parser
    if _parser is None:
        _parser = Parser(Language(tree_sitter_javascript.language()))
    return _parser


def parse_javascript_deps(source: str) -> DepsResult:
    """
    Find every dependency the source requests through AMD calls.
    
    Recognized forms, collected in document order:
    
    - ``define(["a", "b"], factory)`` and ``define("name", ["a"], factory)``
    - ``require(["a"], callback)`` and ``requirejs(["a"])``
    - ``require("a")`` (the CommonJS sugar form inside a define factory)
    
    Args:
        source: JavaScript source text.
    
    Returns:
        DepsResult with the raw requests. Duplicates are kept.
    """
    tree = get_javascript_parser().parse(source.encode("utf-8"))
    deps: List[str] = []
    incomplete = False
    
    for call in _iter_amd_calls(tree.root_node):
        callee = _node_text(call.child_by_field_name("function"))
        args = _arguments(call)
        
        if callee == "define":
            found, ok = _define_deps(args)
        else:
            found, ok = _require_deps(args)
        
        deps.extend(dep for dep in found if dep not in SPECIAL_DEPS)
        if not ok:
            incomplete = True
            logger.debug(f"Non-literal dependency list at line {call.start_point[0] + 1}")
    
    return DepsResult(deps=deps, incomplete_analysis=incomplete)


def _iter_amd_calls(root: Node) -> Iterator[Node]:
    """Yield define/require calls in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "call_expression":
            function = node.child_by_field_name("function")
            if function is not None and function.type == "identifier" and _node_text(function) in AMD_CALLEES:
                yield node
        stack.extend(reversed(node.children))


def _define_deps(args: List[Node]) -> Tuple[List[str], bool]:
    """Dependencies of a define call, skipping an optional module name."""
    if args and _string_value(args[0]) is not None:
        args = args[1:]
    if not args:
        return [], True
    
    first = args[0]
    if first.type == "array":
        return _array_deps(first)
    if first.type in _FACTORY_TYPES:
        # CommonJS sugar requires inside the factory are visited separately
        return [], True
    return [], False


def _require_deps(args: List[Node]) -> Tuple[List[str], bool]:
    """Dependencies of a require/requirejs call."""
    if not args:
        return [], True
    
    first = args[0]
    if first.type == "array":
        return _array_deps(first)
    
    value = _string_value(first)
    if value is not None:
        return [value], True
    # require.config-style objects are not requests
    if first.type == "object":
        return [], True
    return [], False


def _array_deps(array: Node) -> Tuple[List[str], bool]:
    deps = []
    ok = True
    for element in array.named_children:
        if element.type == "comment":
            continue
        value = _string_value(element)
        if value is None:
            ok = False
        else:
            deps.append(value)
    return deps, ok


def _arguments(call: Node) -> List[Node]:
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return []
    return [arg for arg in arguments.named_children if arg.type != "comment"]


def _string_value(node: Node) -> Optional[str]:
    """Return the value of a string literal, or None for anything else."""
    if node.type == "string":
        return _unescape(_node_text(node)[1:-1])
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
        return _unescape(_node_text(node)[1:-1])
    return None


def _unescape(raw: str) -> str:
    """Decode JavaScript escape sequences in the body of a string literal."""
    if "\\" not in raw:
        return raw
    
    def replace(match: "re.Match[str]") -> str:
        escape = match.group(1)
        if escape.startswith("u{"):
            return chr(int(escape[2:-1], 16))
        if escape[0] in "ux" and len(escape) > 1:
            return chr(int(escape[1:], 16))
        if escape in ("\n", "\r", "\r\n", "\u2028", "\u2029"):
            # line continuation
            return ""
        return _SIMPLE_ESCAPES.get(escape, escape)
    
    decoded = _ESCAPE_RE.sub(replace, raw)
    # \uD83D\uDE00 style pairs decode to two surrogates; join them
    return decoded.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def _node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")
