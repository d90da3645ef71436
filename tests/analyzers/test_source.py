"""Tests for script-region extraction."""

from __future__ import annotations

from registrygen.analyzers.source import SourceExtractor
from registrygen.models import AssetFile, ItemType
from tests._fixtures.parsing import requires_grammars


def _asset(path: str, content: str) -> AssetFile:
    return AssetFile(type=ItemType.COMPONENT, path=path, content=content)


def test_plain_script_is_returned_verbatim() -> None:
    content = "import { ref } from 'vue'\nexport const a = ref(1)\n"
    extractor = SourceExtractor()
    for suffix in (".ts", ".js", ".tsx", ".jsx", ".mjs", ".mts"):
        assert extractor.extract(_asset(f"lib/thing{suffix}", content)) == content


def test_unrecognised_extensions_have_no_code() -> None:
    extractor = SourceExtractor()
    assert extractor.extract(_asset("files/readme.md", "import x from 'y'")) == ""
    assert extractor.extract(_asset("files/config.json", "{}")) == ""
    assert extractor.extract(_asset("styles/base.css", "@import 'x.css';")) == ""


@requires_grammars
def test_component_document_joins_script_then_setup() -> None:
    document = """<template>
  <div class="box">{{ greeting }}</div>
</template>

<script setup lang="ts">
import { computed } from 'vue'
const greeting = computed(() => 'hi')
</script>

<script lang="ts">
import { helper } from '@/lib/helper'
export default { name: 'Box' }
</script>
"""
    code = SourceExtractor().extract(_asset("components/self/box/Box.vue", document))

    assert "import { helper } from '@/lib/helper'" in code
    assert "import { computed } from 'vue'" in code
    assert code.index("@/lib/helper") < code.index("computed")
    assert "<template>" not in code
    assert "class=" not in code


@requires_grammars
def test_component_document_without_scripts_has_no_code() -> None:
    document = "<template>\n  <p>static</p>\n</template>\n\n<style>\np { color: red; }\n</style>\n"
    assert SourceExtractor().extract(_asset("components/self/p/P.vue", document)) == ""


@requires_grammars
def test_component_document_with_only_setup_script() -> None:
    document = "<script setup>\nimport Foo from './Foo.vue'\n</script>\n<template><Foo /></template>\n"
    code = SourceExtractor().extract(_asset("components/self/foo/Wrapper.vue", document))
    assert code.startswith("\n")
    assert "import Foo from './Foo.vue'" in code
