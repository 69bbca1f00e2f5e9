"""
TypeScript declaration generator.

Renders a declaration model as ambient ``declare namespace`` blocks
containing interfaces, enums and string-literal union types.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from ....logging_config import get_logger
from ...core.config import EnumStyle
from ...core.filters import VisibilityFilter
from ...core.generator import CodeGenerator, GeneratorOutput
from ...core.model import ClassEntry, EnumEntry, Model, Module, PropertyEntry
from ...core.naming import ModuleNameFormatter, TypeFormatter, format_property_name
from .types import EmissionContext, TypeScriptTypeMapper

logger = get_logger(__name__)

IdentifierFormatter = Callable[[PropertyEntry], str]
MemberTypeFormatter = Callable[[PropertyEntry, str], str]
ModuleNameFormatterFn = Callable[[Module], Tuple[str, Module]]
VisibilityFormatter = Callable[[str], bool]

NAMESPACE_TEMPLATE = """declare namespace {{ name }} {
{% for declaration in declarations %}
{{ declaration | indent(indent) }}
{% endfor %}
}"""

INTERFACE_TEMPLATE = """export interface {{ name }}{% if type_parameters %}<{{ type_parameters | join(", ") }}>{% endif %} {
{% for prop in properties %}
{{ indent }}{{ prop.name }}: {{ prop.type }};
{% endfor %}
}"""

ENUM_TEMPLATE = """export enum {{ name }} {
{% for member in members %}
{{ indent }}{{ member.name }} = {{ member.value }}{{ "," if not loop.last else "" }}
{% endfor %}
}"""

UNION_TEMPLATE = """export type {{ name }} = {% if members %}{% for member in members %}"{{ member.name }}"{{ " | " if not loop.last else "" }}{% endfor %}{% else %}never{% endif %};"""


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript ambient namespace declarations."""

    def __init__(
        self,
        enum_style: EnumStyle = EnumStyle.NUMERIC,
        indent: str = "    ",
        output_namespace: Optional[str] = None,
        hidden_type_marker: str = "Guid",
        type_mapper: Optional[TypeScriptTypeMapper] = None,
        template_dir: Optional[Path] = None,
    ):
        """
        Initialize the TypeScript generator.

        Args:
            enum_style: How enums are rendered
            indent: Indentation unit for nested lines
            output_namespace: Namespace override applied to every module
            hidden_type_marker: Declarations whose name contains this are hidden
            type_mapper: Type mapper to use (a default one when omitted)
            template_dir: Directory with template overrides
        """
        self.enum_style = EnumStyle.parse(enum_style)
        self.indent = indent
        self.type_mapper = type_mapper or TypeScriptTypeMapper()
        self._template_dir = template_dir

        self._identifier_formatter: IdentifierFormatter = format_property_name
        self._member_type_formatter: MemberTypeFormatter = TypeFormatter()
        self._module_name_formatter: ModuleNameFormatterFn = ModuleNameFormatter(
            output_namespace
        )
        self._visibility_formatter: VisibilityFormatter = VisibilityFilter(
            hidden_type_marker
        )

        super().__init__()

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    def get_template_directory(self) -> Optional[Path]:
        return self._template_dir

    def get_builtin_templates(self) -> Dict[str, str]:
        return {
            "namespace.ts.j2": NAMESPACE_TEMPLATE,
            "interface.ts.j2": INTERFACE_TEMPLATE,
            "enum.ts.j2": ENUM_TEMPLATE,
            "union.ts.j2": UNION_TEMPLATE,
        }

    # Formatter injection points

    def set_identifier_formatter(
        self, formatter: IdentifierFormatter
    ) -> "TypeScriptGenerator":
        """Set the formatter that names properties."""
        self._identifier_formatter = formatter
        return self

    def set_member_type_formatter(
        self, formatter: MemberTypeFormatter
    ) -> "TypeScriptGenerator":
        """Set the formatter that finalises each property's type text."""
        self._member_type_formatter = formatter
        return self

    def set_module_name_formatter(
        self, formatter: ModuleNameFormatterFn
    ) -> "TypeScriptGenerator":
        """Set the formatter that resolves a module's namespace name and entry names."""
        self._module_name_formatter = formatter
        return self

    def set_visibility_formatter(
        self, formatter: VisibilityFormatter
    ) -> "TypeScriptGenerator":
        """Set the predicate deciding whether a declaration is emitted."""
        self._visibility_formatter = formatter
        return self

    # Generation

    def generate(self, model: Model, output: GeneratorOutput = GeneratorOutput.ALL) -> str:
        """
        Generate ambient namespace declarations for a model.

        Args:
            model: Model to render
            output: Declaration kinds to emit

        Returns:
            Declarations text
        """
        groups, context = self._resolve_namespaces(model)
        logger.debug(
            f"Generating {len(groups)} namespace(s) "
            f"(single namespace mode: {context.single_namespace})"
        )

        blocks = []
        for name, modules in groups.items():
            declarations = self._render_declarations(modules, output, context)
            if not declarations:
                logger.debug(f"Namespace '{name}' has no visible declarations")
                continue
            blocks.append(
                self.render_template(
                    "namespace.ts.j2",
                    {"name": name, "declarations": declarations, "indent": self.indent},
                )
            )

        return "\n\n".join(blocks) + "\n" if blocks else ""

    def _resolve_namespaces(
        self, model: Model
    ) -> Tuple[Dict[str, List[Module]], EmissionContext]:
        """Group formatted modules by resolved name and build the emission context."""
        groups: Dict[str, List[Module]] = {}
        mapping: Dict[str, str] = {}

        for module in model.modules:
            name, formatted = self._module_name_formatter(module)
            groups.setdefault(name, []).append(formatted)
            mapping.setdefault(module.name, name)

        context = EmissionContext(
            namespace_mapping=mapping, single_namespace=len(groups) == 1
        )
        return groups, context

    def _render_declarations(
        self, modules: List[Module], output: GeneratorOutput, context: EmissionContext
    ) -> List[str]:
        declarations = []

        if GeneratorOutput.PROPERTIES in output:
            for module in modules:
                for entry in module.classes:
                    if self._visibility_formatter(entry.name):
                        declarations.append(self._render_class(entry, context))

        if GeneratorOutput.ENUMS in output:
            for module in modules:
                for entry in module.enums:
                    if self._visibility_formatter(entry.name):
                        declarations.append(self._render_enum(entry))

        return declarations

    def _render_class(self, entry: ClassEntry, context: EmissionContext) -> str:
        properties = [
            {
                "name": self._identifier_formatter(prop),
                "type": self._member_type_formatter(
                    prop, self.type_mapper.map(prop.type, context)
                ),
            }
            for prop in entry.properties
        ]
        return self.render_template(
            "interface.ts.j2",
            {
                "name": entry.name,
                "type_parameters": list(entry.type_parameters),
                "properties": properties,
                "indent": self.indent,
            },
        )

    def _render_enum(self, entry: EnumEntry) -> str:
        if self.enum_style == EnumStyle.STRING_LITERAL:
            return self.render_template(
                "union.ts.j2", {"name": entry.name, "members": entry.members}
            )

        if self.enum_style == EnumStyle.STRING:
            members = [{"name": m.name, "value": f'"{m.name}"'} for m in entry.members]
        else:
            members = [{"name": m.name, "value": m.value} for m in entry.members]

        return self.render_template(
            "enum.ts.j2", {"name": entry.name, "members": members, "indent": self.indent}
        )

    def validate_model(self, model: Model) -> List[str]:
        """Add warnings for declarations that collide inside a merged namespace."""
        warnings = super().validate_model(model)

        groups, _ = self._resolve_namespaces(model)
        for name, modules in groups.items():
            seen = set()
            for module in modules:
                for entry in module.members:
                    if entry.name in seen:
                        warnings.append(
                            f"Duplicate declaration '{entry.name}' in namespace '{name}'"
                        )
                    seen.add(entry.name)

        return warnings
