"""
Extraction of PHP-level facts from C++ files generated by KPHP.

There is no lexer or AST here: arguments, local variables and their C++ types
are recovered with a small set of named text patterns tied to the exact
formatting the code generator emits. This is primitive, but enough for the
generator's output, which is all it has to handle. Files are only ever read.
"""

import re
from pathlib import Path
from typing import List, Optional, Union
import logging

from ..models.artifacts import ClassArtifact, FunctionArtifact, VarDecl


logger = logging.getLogger(__name__)


# Full-line "//" comments: crc headers, "//source = [...]", "//12: php line"
COMMENT_LINE_RE = re.compile(r'^//.+?\n', re.MULTILINE)

# "bool f$fork$name(...) noexcept {" of a resumable function
RESUMABLE_DECLARATION_RE = re.compile(r'\s(f\$fork\$[\w$]+)\((.*?)\)\s(noexcept\s+)?\{')

# "int64_t f$VK$Post$$analyze(...) noexcept {"
PLAIN_DECLARATION_RE = re.compile(r'\s(f\$[\w$]+)\((.*?)\)\s(noexcept\s+)?\{')

# Return type: everything before the function name on the declaration line
RETURN_TYPE_RE = re.compile(r'^(\w.+?)\sf\$[\w$]+\(', re.MULTILINE)

LOCAL_VAR_NAME_RE = re.compile(r'\s(v\$[\w$]+)')

CLASS_DECLARATION_RE = re.compile(r'^struct\sC\$([\w$]+)', re.MULTILINE)

# "  array< int64_t > $tags{};"
INSTANCE_VAR_RE = re.compile(r'^  (.+?)\s\$(\w+)\{', re.MULTILINE)

RESUMABLE_MARKER = 'public Resumable'
RECEIVER_NAME = '$this'
PLAIN_INDENT = '  '
RESUMABLE_INDENT = '    '

# Locals introduced by the compiler, with no counterpart in PHP source
SYNTHETIC_LOCAL_FRAGMENTS = (
    'v$tmp_expr',
    'v$shorthand_ternary_cond$',
    'v$resumable_temp_var$',
    'v$condition_on_switch$',
    'v$matched_with_one_case$',
)


class ExtractionError(Exception):
    """Raised when a generated file does not have the expected shape."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message if path is None else f"{message}: {path}")
        self.path = str(path) if path is not None else None


def strip_comment_lines(src: str) -> str:
    return COMMENT_LINE_RE.sub('', src)


def split_parameters(params: str) -> List[str]:
    """
    Split a C++ parameter list on top-level commas.

    '(' and '<' open a nesting level, ')' and '>' close one, so commas inside
    template arguments like "std::tuple<int64_t, string>" do not split.

    Args:
        params: Text between the parentheses of a declaration

    Returns:
        Parameter declarations, surrounding whitespace removed
    """
    declarations = []
    nest_level = 0
    start = 0
    for i, c in enumerate(params):
        if c in '(<':
            nest_level += 1
        elif c in ')>':
            nest_level -= 1
        elif c == ',' and nest_level <= 0:
            declarations.append(params[start:i].strip())
            start = i + 1

    tail = params[start:].strip()
    if tail:
        declarations.append(tail)
    return declarations


def parse_parameter(declaration: str) -> VarDecl:
    """
    Parse one parameter declaration.

    "array< class_instance<C$VK$Feed$Post> > const &v$posts" gives
    name '$posts' and type 'array< class_instance<C$VK$Feed$Post> >';
    "uint64_t v$number" gives '$number' and 'uint64_t'.
    """
    declaration = declaration.strip()
    pos = declaration.rfind(' ')
    name = declaration[pos + 1:].lstrip('&v')
    cpp_type = declaration[:pos].strip() if pos >= 0 else ''
    if cpp_type.endswith(' const'):
        cpp_type = cpp_type[:-len(' const')]
    return VarDecl(name=name, cpp_type=cpp_type)


def demangle_function_name(cpp_name: str) -> str:
    """
    Turn a C++ function identifier into a PHP name.

    f$someFn -> someFn, f$VK$Feed$Rank$$someFn -> VK\\Feed\\Rank::someFn.
    A second '$$' names an inherited method (BaseClass::method__ChildClass).
    """
    name = re.sub(r'^f\$fork\$', '', cpp_name)
    name = re.sub(r'^f\$', '', name)
    name = name.replace('$$', '::', 1)
    name = name.replace('$$', '__', 1)
    return name.replace('$', '\\')


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        raise ExtractionError(f"cannot read generated file ({e})", path) from e


def _is_local_var_declaration(line: str, var_pos: int, indent: str) -> bool:
    """Check a stripped source line containing ' v$' at var_pos."""
    if not line.startswith(indent) or len(line) <= len(indent) or line[len(indent)].isspace():
        return False

    statement = line[len(indent):]
    if statement.startswith('v$') or statement.startswith('return'):
        return False

    if any(fragment in line for fragment in SYNTHETIC_LOCAL_FRAGMENTS):
        return False

    before_var = line[:var_pos]
    return not any(c in before_var for c in '(}=')


class CppFunctionSource:
    """
    Text of a generated function file, read once.

    Properties are computed on access, so building one just to show the
    function's name in a menu does not parse its locals.
    """

    def __init__(self, path: Union[str, Path], header_extension: str = '.h'):
        self.path = Path(path)
        self.header_extension = header_extension
        self.src = _read_source(self.path)

    @property
    def stripped(self) -> str:
        return strip_comment_lines(self.src)

    @property
    def was_inlined(self) -> bool:
        return self.path.name.endswith(self.header_extension)

    @property
    def is_resumable(self) -> bool:
        return RESUMABLE_MARKER in self.src

    def match_declaration(self) -> Optional[re.Match]:
        """Find the function definition line; m[1] is the name, m[2] the parameters."""
        if self.is_resumable:
            m = RESUMABLE_DECLARATION_RE.search(self.src)
            if m:
                return m
        return PLAIN_DECLARATION_RE.search(self.src)

    def _declaration(self) -> re.Match:
        m = self.match_declaration()
        if not m:
            raise ExtractionError("unrecognized artifact shape", self.path)
        return m

    @property
    def name(self) -> str:
        return demangle_function_name(self._declaration().group(1))

    def parameters(self) -> List[VarDecl]:
        params = [parse_parameter(decl) for decl in split_parameters(self._declaration().group(2))]
        return [param for param in params if param.name != RECEIVER_NAME]

    def local_vars(self) -> List[VarDecl]:
        indent = RESUMABLE_INDENT if self.is_resumable else PLAIN_INDENT
        local_vars = []

        for line in self.stripped.split("\n"):
            var_pos = line.find(' v$')
            if var_pos < 0 or not _is_local_var_declaration(line, var_pos, indent):
                continue

            m = LOCAL_VAR_NAME_RE.search(line)
            var_name = m.group(1)
            local_vars.append(VarDecl(
                name=var_name[1:],
                cpp_type=line[:m.start(1)].strip(),
            ))

        return local_vars

    def return_type(self) -> str:
        """Type written before the name on the matched declaration line."""
        declaration = self.match_declaration()
        line_start = self.src.rfind('\n', 0, declaration.start(1)) + 1 if declaration else 0
        m = RETURN_TYPE_RE.search(self.src, line_start)
        if not m:
            raise ExtractionError("return type not found", self.path)
        return m.group(1).replace('inline ', '')


class CppClassSource:
    """Text of a generated class header, read once."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.src = _read_source(self.path)

    @property
    def name(self) -> str:
        m = CLASS_DECLARATION_RE.search(self.src)
        if not m:
            raise ExtractionError("unrecognized artifact shape", self.path)
        return m.group(1).replace('$', '\\')

    def instance_vars(self) -> List[VarDecl]:
        return [
            VarDecl(name=m.group(2), cpp_type=m.group(1))
            for m in INSTANCE_VAR_RE.finditer(self.src)
        ]


def extract_function(path: Union[str, Path], header_extension: str = '.h') -> FunctionArtifact:
    """
    Extract a function artifact from a generated .cpp or .h file.

    Args:
        path: Generated file holding the function body
        header_extension: Extension marking inlined functions

    Returns:
        FunctionArtifact with signature, locals and flags

    Raises:
        ExtractionError: If the file holds no recognizable function definition
    """
    source = CppFunctionSource(path, header_extension)
    artifact = FunctionArtifact(
        name=source.name,
        path=str(source.path),
        was_inlined=source.was_inlined,
        is_resumable=source.is_resumable,
        return_type=source.return_type(),
        parameters=source.parameters(),
        local_vars=source.local_vars(),
        source=source.src,
    )
    logger.debug(f"Extracted function {artifact.name} from {path}")
    return artifact


def extract_class(path: Union[str, Path]) -> ClassArtifact:
    """
    Extract a class artifact from a generated class header.

    Raises:
        ExtractionError: If the header holds no class declaration
    """
    source = CppClassSource(path)
    return ClassArtifact(
        name=source.name,
        path=str(source.path),
        instance_vars=source.instance_vars(),
        source=source.src,
    )


def read_function_name(path: Union[str, Path]) -> str:
    """Get only the PHP name of a generated function, for menus."""
    return CppFunctionSource(path).name


def read_class_name(path: Union[str, Path]) -> str:
    """Get only the PHP name of a generated class, for menus."""
    return CppClassSource(path).name
