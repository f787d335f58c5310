"""Shared fixtures for core unit tests"""

import pytest

from noteblocks.core.adapters import DictAdapter, SoupAdapter


SAMPLE_TEXT = """\
# Weekly Plan

Some context for the week.

- [ ] buy milk
- [x] call the bank

1. first
1. second

```
print("hello")
```

---

> keep it simple
"""

SAMPLE_HTML = (
    '<h1>Weekly Plan</h1>'
    '<p>Some context for the week.</p>'
    '<ul data-type="taskList">'
    '<li data-type="taskItem" data-checked="false"><label><input type="checkbox"><span></span></label><div><p>buy milk</p></div></li>'
    '<li data-type="taskItem" data-checked="true"><label><input type="checkbox" checked="checked"><span></span></label><div><p>call the bank</p></div></li>'
    '</ul>'
    '<ol><li><p>first</p></li><li><p>second</p></li></ol>'
    '<pre><code>print("hello")</code></pre>'
    '<hr>'
    '<blockquote><p>keep it simple</p></blockquote>'
)


@pytest.fixture(name="dict_adapter")
def dict_adapter_fixture():
    return DictAdapter()


@pytest.fixture(name="soup_adapter")
def soup_adapter_fixture():
    return SoupAdapter()


@pytest.fixture(name="sample_text")
def sample_text_fixture():
    return SAMPLE_TEXT


@pytest.fixture(name="sample_html")
def sample_html_fixture():
    return SAMPLE_HTML
