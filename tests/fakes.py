"""Scripted models, tools and OpenAI client doubles shared by the tests"""

from types import SimpleNamespace

from pydantic import BaseModel

from ai_core.models import AIModel, ModelChunk, ModelContext, ModelResult
from ai_core.tools import Tool


class ScriptedModel(AIModel):
    """Returns the scripted results in order, repeating the last one."""

    def __init__(self, results: list[ModelResult], chunks: list[ModelChunk] | None = None):
        self.results = list(results)
        self.chunks = list(chunks or [])
        self.generate_calls: list[ModelContext] = []
        self.stream_calls: list[ModelContext] = []

    async def generate(self, context: ModelContext) -> ModelResult:
        self.generate_calls.append(context)
        index = min(len(self.generate_calls), len(self.results)) - 1
        return self.results[index]

    async def stream(self, context: ModelContext):
        self.stream_calls.append(context)
        for chunk in self.chunks:
            yield chunk


class FailingModel(AIModel):
    """Backend whose calls raise; with a result, only streaming raises."""

    def __init__(self, error: Exception, result: ModelResult | None = None):
        self.error = error
        self.result = result

    async def generate(self, context: ModelContext) -> ModelResult:
        if self.result is None:
            raise self.error
        return self.result

    async def stream(self, context: ModelContext):
        raise self.error
        yield  # pragma: no cover


class EchoInput(BaseModel):
    text: str


async def _echo(params: EchoInput) -> dict:
    return {"echo": params.text}


def make_echo_tool(name: str = "echo", execute=_echo) -> Tool:
    return Tool(
        name=name,
        description="Echo the text back",
        schema=EchoInput,
        execute=execute,
    )


async def aiter_items(items):
    for item in items:
        yield item


class FakeCompletions:
    """Stands in for client.chat.completions."""

    def __init__(self, response=None, stream_chunks=None):
        self.response = response
        self.stream_chunks = list(stream_chunks or [])
        self.requests: list[dict] = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if kwargs.get("stream"):
            return aiter_items(self.stream_chunks)
        return self.response


class FakeEmbeddings:
    """Stands in for client.embeddings, mapping known texts to vectors."""

    def __init__(self, vectors: dict[str, list[float]]):
        self.vectors = vectors
        self.requests: list[dict] = []

    async def create(self, model, input):
        self.requests.append({"model": model, "input": input})
        texts = [input] if isinstance(input, str) else list(input)
        return SimpleNamespace(
            data=[SimpleNamespace(embedding=self.vectors[text]) for text in texts]
        )


def fake_chat_client(completions: FakeCompletions) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def fake_embedding_client(embeddings: FakeEmbeddings) -> SimpleNamespace:
    return SimpleNamespace(embeddings=embeddings)
