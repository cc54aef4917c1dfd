"""Shared fixtures: a sample document covering lists, paragraphs, links and a form."""

import pytest

from dom_document import DOMDocument
from dom_document.utils.config import Config

SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head>
    <title>Sample</title>
</head>
<body>
<div id="container">
    <ul id="list">
        <li class="item first">One</li>
        <li class="item template">Two</li>
        <li class="item last" data-id="3" data-role="final">Three</li>
    </ul>
    <p class="before">Before</p>
    <p id="middle">Middle</p>
    <p class="after">After</p>
    <a id="blog" href="/blog" style="color: red; font-weight: bold">Blog</a>
    <form id="form" action="/submit">
        <input type="checkbox" name="agree" id="agree" checked>
        <input type="radio" name="choice" id="choice-a" value="a">
        <input type="text" name="title" id="title" value="Hello" required pattern="[A-Z].*">
        <input type="number" name="count" id="count" data-laravel-rules='["min:1"]'>
        <textarea name="body" id="body">Text</textarea>
        <select name="colour" id="colour">
            <option value="red">Red</option>
            <option value="green" selected>Green</option>
            <option>Blue</option>
        </select>
    </form>
    <div id="html-method-test"><span>Inner</span> text</div>
    <div class="node-to-be-removed">Remove me</div>
</div>
</body>
</html>
"""


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def document() -> DOMDocument:
    return DOMDocument(SAMPLE_HTML)


@pytest.fixture
def config() -> Config:
    return Config()
