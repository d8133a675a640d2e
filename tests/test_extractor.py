from pathlib import Path

import pytest

from mermaidpng.errors import NoDiagramFoundError
from mermaidpng.extractor import extract, extract_fenced, input_kind_for
from mermaidpng.models import DiagramSource, InputKind

DOC = """# Architecture

Some prose.

```mermaid
graph TD
    A --> B
```

```python
print("not a diagram")
```

More prose.

```mermaid
sequenceDiagram
    Alice->>Bob: Hi
```
"""


def test_input_kind_for():
    assert input_kind_for("notes.md") is InputKind.COMPOSITE_DOCUMENT
    assert input_kind_for(Path("NOTES.MD")) is InputKind.COMPOSITE_DOCUMENT
    assert input_kind_for("notes.markdown") is InputKind.COMPOSITE_DOCUMENT
    assert input_kind_for("flow.mmd") is InputKind.STANDALONE_DIAGRAM
    assert input_kind_for("flow") is InputKind.STANDALONE_DIAGRAM
    assert input_kind_for("flow.txt") is InputKind.STANDALONE_DIAGRAM


def test_standalone_is_one_trimmed_source():
    content = "\n\n  graph LR\n    A --> B\n\n"
    assert extract(content, InputKind.STANDALONE_DIAGRAM) == [
        DiagramSource(text="graph LR\n    A --> B", index=1)
    ]


def test_composite_skips_untagged_blocks_in_order():
    sources = extract(DOC, InputKind.COMPOSITE_DOCUMENT)
    assert [s.index for s in sources] == [1, 2]
    assert sources[0].text == "graph TD\n    A --> B"
    assert sources[1].text == "sequenceDiagram\n    Alice->>Bob: Hi"


def test_closing_fence_without_newline():
    assert extract_fenced("```mermaid\ngraph TD; A-->B```") == ["graph TD; A-->B"]
    assert extract_fenced("```mermaid graph TD; A-->B ```") == ["graph TD; A-->B"]


def test_tag_match_is_exact_and_case_sensitive():
    content = "```Mermaid\ngraph TD\n```\n```mermaidjs\ngraph TD\n```\n```\ngraph TD\n```\n"
    assert extract_fenced(content) == []


def test_tagged_block_after_untagged_block():
    content = "```\nplain\n```\n```mermaid\npie\n```"
    assert extract_fenced(content) == ["pie"]


@pytest.mark.parametrize("n_tagged,n_plain", [(1, 0), (3, 2), (5, 5)])
def test_counts_only_tagged_blocks(n_tagged: int, n_plain: int):
    parts = []
    for i in range(max(n_tagged, n_plain)):
        if i < n_tagged:
            parts.append(f"```mermaid\ngraph TD\n  N{i} --> M{i}\n```")
        if i < n_plain:
            parts.append(f"```bash\necho {i}\n```")
    sources = extract("\n\ntext\n\n".join(parts), InputKind.COMPOSITE_DOCUMENT)
    assert len(sources) == n_tagged
    assert [s.text.splitlines()[1].strip() for s in sources] == [
        f"N{i} --> M{i}" for i in range(n_tagged)
    ]


def test_composite_without_diagrams_raises():
    with pytest.raises(NoDiagramFoundError) as excinfo:
        extract("# Title\n\n```python\nx = 1\n```\n", InputKind.COMPOSITE_DOCUMENT, "doc.md")
    assert excinfo.value.path == Path("doc.md")
    assert "doc.md" in str(excinfo.value)
