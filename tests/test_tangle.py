"""Tests for the export header hooks and block tangling."""

import pytest

from ada_babel.tangle import (
    after_tangle,
    before_tangle,
    generated_banner,
    tangle_block,
    tangling,
)


def _custom_header(document: str) -> str:
    return f"-- from {document}\n"


class TestHooks:

    def test_before_after_restores_previous_generator(self, ctx):
        ctx.header_generator = _custom_header
        before_tangle(ctx)
        assert ctx.header_generator is generated_banner
        after_tangle(ctx)
        assert ctx.header_generator is _custom_header
        assert not ctx.has_header_backup

    def test_restores_none(self, ctx):
        before_tangle(ctx)
        after_tangle(ctx)
        assert ctx.header_generator is None

    def test_nested_before_is_rejected(self, ctx):
        before_tangle(ctx)
        with pytest.raises(RuntimeError):
            before_tangle(ctx)
        after_tangle(ctx)
        assert ctx.header_generator is None

    def test_after_without_before(self, ctx):
        with pytest.raises(RuntimeError):
            after_tangle(ctx)

    def test_context_manager_restores_on_error(self, ctx):
        ctx.header_generator = _custom_header
        with pytest.raises(ValueError):
            with tangling(ctx):
                raise ValueError("export failed")
        assert ctx.header_generator is _custom_header


class TestBanner:

    def test_banner_contents(self):
        banner = generated_banner("notes.org")
        assert "notes.org" in banner
        assert "DO NOT EDIT" in banner
        assert all(line.startswith("--") for line in banner.splitlines())


class TestTangleBlock:

    def test_tangle_with_banner(self, ctx, tmp_path):
        target = tmp_path / "out" / "hello.adb"
        options = {"template": "main", "with": "Ada.Text_IO"}
        with tangling(ctx):
            tangle_block(ctx, 'Put_Line ("Hi");', options, target, "notes.org")

        text = target.read_text()
        assert text.startswith("-" * 72)
        assert "DO NOT EDIT" in text
        assert "procedure hello is" in text
        assert "with Ada.Text_IO; use Ada.Text_IO;" in text

    def test_tangle_outside_hooks_has_no_banner(self, ctx, tmp_path):
        target = tmp_path / "plain.adb"
        tangle_block(ctx, "null;", {}, target, "notes.org")
        assert target.read_text() == "null;"

    def test_unit_name_from_target_is_a_legal_identifier(self, ctx, tmp_path):
        target = tmp_path / "hello-world.adb"
        tangle_block(ctx, "null;", {"template": "main"}, target, "notes.org")
        text = target.read_text()
        assert "procedure hello_world is" in text
        assert "hello-world" not in text
