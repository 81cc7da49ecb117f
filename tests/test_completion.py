from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from scopeshell.commands import Candidate, CliCommand, CommandTree, option
from scopeshell.interface.completion import complete, current_word, suggest


def replacements(result):
    return [candidate.replacement for candidate in result[1]]


def at_end(tree, line):
    return complete(tree, line, len(line))


def test_current_word():
    assert current_word("class in", 8) == (6, "in")
    assert current_word("class ", 6) == (6, "")
    assert current_word("class info", 3) == (0, "cla")


def test_scope_name_prefix():
    tree = CommandTree()
    tree.add_scope("class")
    tree.add_scope("namespace")
    assert at_end(tree, "cla") == (0, [Candidate("class", "class")])


def test_empty_line_lists_root_names(tree):
    assert at_end(tree, "") == (0, [Candidate.plain(n) for n in ("class", "namespace", "ping")])


def test_names_inside_a_scope(tree):
    start, candidates = at_end(tree, "class ")
    assert start == 6
    assert [c.replacement for c in candidates] == ["create", "info"]


def test_option_value_autocomplete(tree):
    line = "class info --name ac"
    start, candidates = at_end(tree, line)
    assert start == len("class info --name ")
    assert {c.replacement for c in candidates} == {"acme", "acme2"}


def test_autocomplete_values_are_prefix_filtered(tree):
    assert replacements(at_end(tree, "class create --namespace ns2")) == ["ns2"]
    assert replacements(at_end(tree, "class create --validate t")) == ["true"]


def test_unterminated_quote_yields_nothing(tree):
    line = 'class info --name "acme'
    assert at_end(tree, line) == (len(line), [])


def test_dash_lists_matching_options(tree):
    assert replacements(at_end(tree, "class info -")) == ["--name", "--json", "--help"]
    assert replacements(at_end(tree, "class info --n")) == ["--name"]


def test_already_typed_options_are_skipped(tree):
    assert replacements(at_end(tree, "class info --name acme --")) == ["--json", "--help"]
    assert replacements(at_end(tree, "class info -n acme ")) == ["--json", "--help"]


def test_after_a_flag_options_are_suggested(tree):
    assert replacements(at_end(tree, "class info --json ")) == ["--name", "--help"]


def test_option_without_autocomplete_has_no_value_suggestions(tree):
    assert at_end(tree, "class create --description ")[1] == []


def test_option_display_is_aligned(tree):
    _, candidates = at_end(tree, "class info -")
    assert candidates[0].display == "-n, --name <str>  Name of the class"
    assert candidates[1].display == "-j, --json <bool> Output as JSON"


def test_cursor_in_the_middle_of_the_line(tree):
    assert complete(tree, "cla info", 3) == (0, [Candidate.plain("class")])


def test_failing_autocomplete_yields_nothing():
    def broken(tree, prefix, tokens):
        raise RuntimeError("backend offline")

    @dataclass
    class Lookup(CliCommand):
        target: Optional[str] = option(short="t", long="target", autocomplete=broken)

        def execute(self, client, tokens):
            pass

    tree = CommandTree()
    tree.add_command("lookup", Lookup())
    assert at_end(tree, "lookup --target x") == (len("lookup --target "), [])


def test_suggest_returns_replacements(tree):
    assert suggest(tree, "namespace l") == ["list"]
    assert suggest(tree, "ping -") == ["--count", "--help"]


def test_supplied_value_moves_on_to_options():
    seen_prefixes = []

    def regions(tree, prefix, tokens):
        seen_prefixes.append(prefix)
        return [name for name in ("eu-west", "us-east") if name.startswith(prefix)]

    @dataclass
    class Deploy(CliCommand):
        region: Optional[str] = option(short="r", long="region", autocomplete=regions)
        force: Optional[bool] = option(short="f", long="force", flag=True)

        def execute(self, client, tokens):
            pass

    tree = CommandTree()
    tree.add_command("deploy", Deploy())
    assert replacements(at_end(tree, "deploy --region eu-west ")) == ["--force", "--help"]
    assert seen_prefixes == ["eu-west"]
