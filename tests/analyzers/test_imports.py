"""Tests for tree-sitter import extraction."""

from __future__ import annotations

from registrygen.analyzers.imports import ImportExtractor
from tests._fixtures.parsing import requires_grammars


def test_blank_code_has_no_imports() -> None:
    assert ImportExtractor().extract("") == []
    assert ImportExtractor().extract("   \n\t") == []


@requires_grammars
def test_static_import_forms_are_collected_in_order() -> None:
    code = """
import { ref } from 'vue'
import Button from "@/components/ui/button"
import * as utils from '@/lib/utils'
import type { Props } from './types'
import './side-effect.css'
"""
    assert ImportExtractor().extract(code) == [
        "vue",
        "@/components/ui/button",
        "@/lib/utils",
        "./types",
        "./side-effect.css",
    ]


@requires_grammars
def test_dynamic_imports_follow_static_ones() -> None:
    code = """
const Lazy = () => import('./Lazy.vue')
import { nanoid } from 'nanoid'
async function load() {
  return await import("shiki")
}
"""
    assert ImportExtractor().extract(code) == ["nanoid", "./Lazy.vue", "shiki"]


@requires_grammars
def test_duplicate_specifiers_are_reported_once() -> None:
    code = """
import { a } from 'lodash'
import { b } from 'lodash'
const c = import('lodash')
"""
    assert ImportExtractor().extract(code) == ["lodash"]


@requires_grammars
def test_non_literal_dynamic_import_is_ignored() -> None:
    code = "const name = 'x'\nconst mod = import(name)\nrequire('not-an-import')\n"
    assert ImportExtractor().extract(code) == []


@requires_grammars
def test_broken_code_still_yields_recoverable_imports() -> None:
    code = "import { ref } from 'vue'\nconst = = ;\n"
    assert "vue" in ImportExtractor().extract(code)
