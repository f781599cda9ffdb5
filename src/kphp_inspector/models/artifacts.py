"""
Artifact data models for the KPHP Inspector.

An artifact is one generated function or class, recovered from the C++ text
the compiler wrote for it. Artifacts are built right before being displayed
and are discarded afterwards.
"""

from typing import Dict, List, Any
from pathlib import Path
from enum import Enum
from pydantic import BaseModel, Field


class ArtifactKind(Enum):
    """Kinds of artifacts a query can ask for."""
    FUNCTION = "function"
    CLASS = "class"


class VarDecl(BaseModel):
    """
    A named C++ declaration: a parameter, a local variable or an instance field.

    Attributes:
        name: PHP-side name, e.g. '$posts'
        cpp_type: C++ type as written by the generator
    """

    name: str = Field(..., description="PHP-side variable name")
    cpp_type: str = Field("", description="C++ type of the variable")


class FunctionArtifact(BaseModel):
    """
    A generated function.

    Attributes:
        name: Human qualified name, e.g. 'VK\\Feed\\Post::analyze'
        path: File the function was found in
        was_inlined: Function body lives in a header
        is_resumable: Function is a resumable (forkable) computation
        return_type: C++ return type
        parameters: Arguments, without the implicit $this
        local_vars: Local variables, without compiler-introduced temporaries
        source: Verbatim file contents
    """

    name: str = Field(..., description="Human qualified function name")
    path: str = Field(..., min_length=1, description="Declaring file")
    was_inlined: bool = Field(False, description="Function body lives in a header")
    is_resumable: bool = Field(False, description="Function is resumable")
    return_type: str = Field("", description="C++ return type")
    parameters: List[VarDecl] = Field(default_factory=list, description="Function arguments")
    local_vars: List[VarDecl] = Field(default_factory=list, description="Local variables")
    source: str = Field("", description="Verbatim file contents")

    @property
    def line_count(self) -> int:
        return len(self.source.split("\n"))

    def get_filename(self) -> str:
        """Get just the filename without directory path."""
        return Path(self.path).name

    def to_dict(self) -> Dict[str, Any]:
        """Convert the artifact to a dictionary, without the source text."""
        data = self.model_dump(exclude={'source'})
        data['line_count'] = self.line_count
        return data


class ClassArtifact(BaseModel):
    """
    A generated class.

    Attributes:
        name: Human qualified name, e.g. 'VK\\Feed\\Post'
        path: Header the class is declared in
        instance_vars: Instance fields in declaration order
        source: Verbatim file contents
    """

    name: str = Field(..., description="Human qualified class name")
    path: str = Field(..., min_length=1, description="Declaring header")
    instance_vars: List[VarDecl] = Field(default_factory=list, description="Instance fields")
    source: str = Field("", description="Verbatim file contents")

    def get_filename(self) -> str:
        return Path(self.path).name

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude={'source'})
