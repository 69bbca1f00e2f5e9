"""
Unit tests for the declaration post processor.
"""

import pytest

from declgen.codegen.core.postprocess import CodePostProcessor, process


class TestNormalisation:
    """Test whitespace normalisation."""

    @pytest.mark.parametrize("code", ["", "   ", "\n\n\t\n", None])
    def test_empty_input_returns_empty_string(self, code):
        assert process(code) == ""

    def test_output_trimmed(self):
        assert process('\n\n  export type A = "X";  \n\n') == 'export type A = "X";'

    def test_excess_newlines_collapsed(self):
        code = "declare namespace A {\n}\n\n\n\n\ndeclare namespace B {\n}"
        result = process(code, marker="")
        assert "\n\n\n" not in result
        assert result == "declare namespace A {\n}\n\ndeclare namespace B {\n}"

    def test_trailing_whitespace_removed(self):
        assert process("export type A = \"X\";   \nexport type B = \"Y\";") == (
            'export type A = "X";\nexport type B = "Y";'
        )


class TestHiddenDeclarations:
    """Test removal of declarations carrying the hidden marker."""

    def test_multi_line_interface_removed(self):
        code = (
            "declare namespace A {\n"
            "    export interface IUser {\n"
            "        id: string;\n"
            "    }\n"
            "    export interface IGuid {\n"
            "        value: string;\n"
            "    }\n"
            "}"
        )
        result = process(code)
        assert "IGuid" not in result
        assert result == (
            "declare namespace A {\n"
            "    export interface IUser {\n"
            "        id: string;\n"
            "    }\n"
            "}"
        )

    def test_single_line_interface_removed(self):
        code = "declare namespace A {\n    export interface IGuid { value: string; }\n    export interface IUser { id: string; }\n}"
        result = process(code)
        assert "IGuid" not in result
        assert "export interface IUser { id: string; }" in result

    def test_case_insensitive_marker(self):
        code = "export enum guidKind {\n    A = 0\n}\nexport interface IUser {\n}"
        assert process(code) == "export interface IUser {\n}"

    def test_type_alias_removed(self):
        code = 'export type GuidLike = "A" | "B";\nexport type Color = "Red";'
        assert process(code) == 'export type Color = "Red";'

    def test_nested_braces_in_removed_block(self):
        code = (
            "export interface IGuidMap {\n"
            "    items: { [key: string]: number };\n"
            "}\n"
            "export interface IKeep {\n"
            "}"
        )
        assert process(code) == "export interface IKeep {\n}"

    def test_namespace_left_empty_is_dropped(self):
        code = (
            "declare namespace A {\n"
            "    export interface IGuid {\n"
            "    }\n"
            "}\n\n"
            "declare namespace B {\n"
            "    export interface IUser {\n"
            "    }\n"
            "}"
        )
        result = process(code)
        assert "declare namespace A" not in result
        assert result.startswith("declare namespace B {")

    def test_property_types_are_not_declarations(self):
        """Only declaration identifiers are matched, not member names."""
        code = "export interface IUser {\n    guid: string;\n}"
        assert process(code) == code

    def test_bare_interface_removed(self):
        """Declarations without export/declare modifiers are swept too."""
        code = (
            "interface IGuid {\n"
            "    value: string;\n"
            "}\n\n"
            "interface IUser {\n"
            "    id: string;\n"
            "}"
        )
        assert process(code) == "interface IUser {\n    id: string;\n}"

    def test_bare_enum_and_type_removed(self):
        code = (
            "enum GuidKind {\n"
            "    A = 0\n"
            "}\n"
            "type GuidAlias = string;\n"
            "interface IKeep {\n"
            "    type: string;\n"
            "}"
        )
        assert process(code) == "interface IKeep {\n    type: string;\n}"

    def test_members_named_like_keywords_are_kept(self):
        code = "interface IGuidless {\n}\nexport interface IUser {\n    type: string;\n    enum: number;\n}"
        result = process(code, marker="less")
        assert result == "export interface IUser {\n    type: string;\n    enum: number;\n}"

    def test_custom_marker(self):
        code = "export interface ISecret {\n}\nexport interface IGuid {\n}"
        result = CodePostProcessor("Secret").process(code)
        assert "ISecret" not in result
        assert "IGuid" in result
