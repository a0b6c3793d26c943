"""Shared fixtures for core unit tests"""

import pytest
from markdown_it import MarkdownIt


BLOG_POST = """\
---
title: Practicing for C++ interviews
date: 2019-03-02
taxonomy:
    category: blog
    tag: [interview, practice, c++, ctest, conan, cmake, programming]
highlight:
    theme: monokai
---

# Setting up

A small project built with [CMake](https://cmake.org) and [Conan](https://conan.io).

```cmake
cmake_minimum_required(VERSION 3.10)
```

> [!NOTE]
> Tests run through CTest.

! Remember to install Conan first.

```
plain fence
```

![diagram](diagram.png)

[cmake-docs]: https://cmake.org/documentation
"""

RESUME = """\
---
title: Résumé
menu: Résumé
---

Download as [PDF](resume.pdf).

## Experience

- Software engineer
- Build tooling
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return MarkdownIt("gfm-like", options_update={"linkify": False})


@pytest.fixture(name="blog_file")
def blog_file_fixture(tmp_path):
    f = tmp_path / "cpp-interviews.md"
    f.write_text(BLOG_POST, encoding="utf-8")
    return f


@pytest.fixture(name="resume_file")
def resume_file_fixture(tmp_path):
    f = tmp_path / "resume.md"
    f.write_text(RESUME, encoding="utf-8")
    return f


@pytest.fixture(name="blog_text")
def blog_text_fixture():
    return BLOG_POST


@pytest.fixture(name="resume_text")
def resume_text_fixture():
    return RESUME
