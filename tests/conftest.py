import io

import pytest
from docx import Document
from fastapi.testclient import TestClient
from reportlab.pdfgen import canvas as rl_canvas

from inspection_app.core.settings import Settings
from inspection_app.main import create_app


class FakeLLM:
    """Stands in for the completion service and records every prompt."""

    model = "fake-model"
    temperature = 0.4

    def __init__(self, output='{"summary": "ok"}', error=None):
        self.output = output
        self.error = error
        self.prompts = []

    def generate_text(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(tmp_path, upload_dir):
    return Settings(
        config_path=tmp_path / "missing.yaml",
        upload_dir=upload_dir,
        OPENAI_API_KEY=None,
        GEMINI_API_KEY=None,
        log_json=False,
    )


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def make_client(settings, llm):
    def _make(llm=llm, **overrides):
        app_settings = settings.model_copy(update=overrides) if overrides else settings
        return TestClient(create_app(app_settings, llm=llm))

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def make_pdf():
    def _make(*lines):
        buf = io.BytesIO()
        c = rl_canvas.Canvas(buf)
        y = 750
        for line in lines:
            c.drawString(72, y, line)
            y -= 20
        c.showPage()
        c.save()
        return buf.getvalue()

    return _make


@pytest.fixture
def make_docx():
    def _make(*paragraphs):
        doc = Document()
        for p in paragraphs:
            doc.add_paragraph(p)
        buf = io.BytesIO()
        doc.save(buf)
        return buf.getvalue()

    return _make
