import pytest

from locallens.backend import ModelBackend, ModelPath
from locallens.embedding import Embedder, EmptyTextError, ModelNotLoadedError
from locallens.logger import discard


class FakeEmbed(ModelBackend):
    def __init__(self, data):
        self.data = data
        self.requests = []
        self.unloaded = 0

    def chat(self, data):
        raise AssertionError("not used")

    def embeddings(self, data):
        self.requests.append(data)
        return {"data": self.data}

    def unload(self):
        self.unloaded += 1


class FakeLoader:
    def __init__(self, data=None):
        self.data = [{"embedding": [0.25, -0.5, 0.75]}] if data is None else data
        self.configs = []
        self.backends = []

    def __call__(self, **config):
        self.configs.append(config)
        backend = FakeEmbed(self.data)
        self.backends.append(backend)
        return backend


PATHS = ModelPath(("embed.gguf",))


def test_embed():
    e = Embedder(discard(), PATHS, FakeLoader())
    e.load()
    vec = e.embed("A brown dog running through a green field")
    e.unload()
    assert vec == [0.25, -0.5, 0.75]
    assert not (vec[0] == 0 and vec[-1] == 0)


def test_embed_not_loaded():
    e = Embedder(discard(), ModelPath(), FakeLoader())
    with pytest.raises(ModelNotLoadedError):
        e.embed("any text")


def test_embed_empty_text():
    e = Embedder(discard(), PATHS, FakeLoader())
    e.load()
    with pytest.raises(EmptyTextError):
        e.embed("")


def test_request_shape():
    loader = FakeLoader()
    e = Embedder(discard(), PATHS, loader)
    e.load()
    e.embed("hello")
    assert loader.backends[0].requests == [{"input": "hello", "truncate": True}]


def test_no_data_returned():
    e = Embedder(discard(), PATHS, FakeLoader(data=[]))
    e.load()
    with pytest.raises(RuntimeError, match="no embedding data returned"):
        e.embed("hello")


def test_load_config():
    loader = FakeLoader()
    e = Embedder(discard(), PATHS, loader)
    e.load()
    e.load()
    assert len(loader.configs) == 1
    config = loader.configs[0]
    assert config["model_files"] == ("embed.gguf",)
    assert config["context_window"] == 2048
    assert config["n_batch"] == 2048
    assert config["n_ubatch"] == 512
    assert config["flash_attention"] is True


def test_unload_releases_model():
    loader = FakeLoader()
    e = Embedder(discard(), PATHS, loader)
    e.load()
    assert e.is_loaded() is True
    e.unload()
    e.unload()
    assert e.is_loaded() is False
    assert loader.backends[0].unloaded == 1