"""
Shared pytest fixtures for review segmentation tests.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


FULL_REVIEW = """## ❌ Bad Code:
```javascript
function sum(a, b) {
  return a + b
}
```

## 🔍 Issues:
- ❌ Missing semicolon after the return statement.
- ❌ No input validation for non-numeric arguments.

## ✅ Recommended Fix:
```javascript
function sum(a, b) {
  return a + b;
}
```

## 💡 Improvements:
1. ✔ Consistent semicolon usage.
2. ✔ Easier to lint.

### Suggestions
* Add unit tests for edge cases.
"""


@pytest.fixture
def full_review() -> str:
    """A well-formed review report with every section present."""
    return FULL_REVIEW


@pytest.fixture
def review_file(tmp_path) -> Path:
    """FULL_REVIEW written to a temporary file."""
    path = tmp_path / "review.md"
    path.write_text(FULL_REVIEW, encoding="utf-8")
    return path
