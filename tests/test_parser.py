"""tests for the local command parser."""

from wbs_editor.core.operations import Add, AddDoc, GenerateTree, Move, Remove, Rename
from wbs_editor.core.parser import parse_commands, parse_line, strip_online_prefix


class TestParseLine:
    """tests for single commands."""

    def test_move(self):
        assert parse_commands("mover 2.K.1 para 2.M") == [Move(key="2.K.1", new_parent="2.M")]

    def test_rename(self):
        assert parse_line("renomear 3.P.1 para Projeto I&C revisado") == Rename(
            key="3.P.1", label="Projeto I&C revisado"
        )

    def test_rename_variants(self):
        assert parse_line("renomeie 1 para Unidade") == Rename(key="1", label="Unidade")
        assert parse_line("renomeia 1 para Unidade") == Rename(key="1", label="Unidade")

    def test_add_with_colon(self):
        assert parse_line("adicionar filho em 4.L: Relatório de segurança") == Add(
            parent="4.L", label="Relatório de segurança"
        )

    def test_add_with_dash(self):
        assert parse_line("adicione filho em 4.L - Relatório") == Add(parent="4.L", label="Relatório")

    def test_remove(self):
        assert parse_line("remover 1.C.1") == Remove(key="1.C.1")

    def test_add_doc(self):
        assert parse_line("documento 1.P.1 https://example.org/doc.pdf") == AddDoc(
            key="1.P.1", doc="https://example.org/doc.pdf"
        )

    def test_generate(self):
        assert parse_line("gerar eap Microrreator de pesquisa 50kW") == GenerateTree(
            description="Microrreator de pesquisa 50kW"
        )

    def test_generate_without_description(self):
        assert parse_line("gerar eap") == GenerateTree()

    def test_case_insensitive(self):
        assert parse_line("MOVER 2.K.1 PARA 2.M") == Move(key="2.K.1", new_parent="2.M")

    def test_not_a_command(self):
        assert parse_line("please reorganize everything") is None


class TestParseCommands:
    """tests for multi-command text."""

    def test_semicolons_and_newlines(self):
        text = "remover 1.C.1; mover 2.K.1 para 2.M\nrenomear 1 para Unidade;;"
        assert parse_commands(text) == [
            Remove(key="1.C.1"),
            Move(key="2.K.1", new_parent="2.M"),
            Rename(key="1", label="Unidade"),
        ]

    def test_unrecognized_lines_skipped(self):
        assert parse_commands("hello\nremover 1.C.1\nwhat now") == [Remove(key="1.C.1")]

    def test_nothing_recognized(self):
        assert parse_commands("make the tree better") == []
        assert parse_commands("") == []


class TestOnlinePrefix:
    """tests for the /online escape."""

    def test_prefix_detected(self):
        assert strip_online_prefix("/online remover 1.C.1") == (True, "remover 1.C.1")

    def test_no_prefix(self):
        assert strip_online_prefix("  remover 1.C.1 ") == (False, "remover 1.C.1")

    def test_prefix_must_be_a_word(self):
        assert strip_online_prefix("/onlinex foo") == (False, "/onlinex foo")
