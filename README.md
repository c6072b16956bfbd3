# locallens

Search your own photo folders by meaning, on your own machine.

locallens works in two phases:

1. **Describe** – every image in a folder is shrunk so that neither side
   exceeds 384 pixels, re-encoded as JPEG and handed to a vision model,
   which writes a text description of it.
2. **Embed** – each description is turned into a vector by an embedding
   model and stored in an index file.

A search query is embedded the same way and compared with every stored
vector by cosine similarity; the closest images come back first.

While a folder is being indexed only one model is held at a time: the vision
model is unloaded before the embedding model is loaded.

## Installation

The package needs Python 3.10 or later and depends on Pillow and psutil.
Install it from a checkout of this project with your usual tool; the `test`
extra adds pytest.

## What the package does not do

locallens is a library. It has no command-line program and no user
interface, and it does not download or run models itself. To index and
search you supply a `loader`: a callable that takes a model configuration as
keyword arguments and returns a `locallens.backend.ModelBackend` (see
"Supplying models" below).

## Supported images

Files ending in `.jpg`, `.jpeg`, `.png`, `.gif`, `.webp` and `.bmp`
(in any letter case) are picked up when a folder is walked, sub-folders
included, in sorted name order. Symbolic links are not followed.
`locallens.service.find_images(folder_path)` returns that list on its own.

## The parts

| Module | What it does |
| --- | --- |
| `locallens.image` | `resize(src_path, max_side=384)` loads an image, flattens any transparency onto black, scales it down with bicubic resampling so neither side exceeds `max_side`, and returns JPEG bytes (quality 90). Images that already fit are re-encoded unchanged in size. A file that cannot be decoded raises `ValueError`. |
| `locallens.search` | `cosine_similarity(a, b)` and `find_top_k(query, entries, k)` over `Entry` items, returning `Result` items (`path`, `description`, `score`) best first. |
| `locallens.index` | `Index`, a thread-safe, path-keyed store of `Entry` items with `add`, `get`, `remove`, `all`, `len()`, `in`, and `save` / `load` to a JSON file. |
| `locallens.description` | `Describer`, which loads a vision model and turns an image path into a description. `DEFAULT_PROMPT` holds the prompt it sends. |
| `locallens.embedding` | `Embedder`, which loads an embedding model and turns text into a vector. |
| `locallens.service` | `Service`, which ties the above together with `index_folder`, `search` and `close`. |
| `locallens.backend` | `ModelPath`, `ModelPaths` and the abstract `ModelBackend` (`chat`, `embeddings`, `unload`). |
| `locallens.logger` | `new()` for a logger that prints `message: key[value] ...` lines to stdout, `discard()` for a silent one. |
| `locallens.sysmon` | `capture()` returns a `Snapshot` of available RAM in MiB and the process's page-fault count on Windows; elsewhere both are `0`. |

## Searching vectors directly

```python
from locallens.search import Entry, find_top_k, cosine_similarity

entries = [
    Entry(path="dog.jpg", description="A brown dog", embedding=[1, 0, 0, 0]),
    Entry(path="cat.jpg", description="A white cat", embedding=[0, 1, 0, 0]),
    Entry(path="bird.jpg", description="A blue bird", embedding=[0, 0, 1, 0]),
]

results = find_top_k([1, 0.1, 0, 0], entries, 2)
print(results[0].path)                      # dog.jpg
print(cosine_similarity([1, 0], [-1, 0]))   # -1.0
```

Vectors of different lengths, empty vectors and zero vectors score `0`.
An empty entry list or a `k` of zero or less gives an empty list; a `k`
larger than the number of entries gives them all.

## Keeping an index

```python
from locallens.index import Entry, Index

idx = Index("photos.index")
idx.load()                      # leaves the index as it is if the file is not there
idx.add(Entry(path="photo1.jpg",
              description="A sunset over the ocean",
              embedding=[0.5, 0.5, 0.0, 0.0]))
idx.save()

print(len(idx))                 # 1
print(idx.get("photo1.jpg"))    # the entry; None for an unknown path
```

Adding an entry with a path that is already present replaces it. A file that
does not hold a valid index raises `ValueError` on `load`.

## Supplying models

`ModelPath(model_files=..., proj_file=...)` names the files of one model.
The loader is called with keyword arguments:

* for the vision model: `model_files`, `proj_file`, `context_window=1024`,
  `n_batch=8`, `n_ubatch=8`, `cache_type_k="q8_0"`, `cache_type_v="q8_0"`;
* for the embedding model: `model_files`, `context_window=2048`,
  `n_batch=2048`, `n_ubatch=512`, `cache_type_k="q8_0"`,
  `cache_type_v="q8_0"`, `flash_attention=True`.

The returned `ModelBackend` must answer:

* `chat(data)` – `data` holds `messages` (a system prompt, the JPEG bytes as
  a user message, then the user prompt), `temperature` and `max_tokens`; the
  answer looks like `{"choices": [{"message": {"content": "..."}}]}`.
* `embeddings(data)` – `data` is `{"input": text, "truncate": True}`; the
  answer looks like `{"data": [{"embedding": [0.1, ...]}]}`.
* `unload()` – release the model.

## Indexing a folder and searching it

```python
from locallens import logger
from locallens.service import Service

with Service(
    log=logger.new(),
    vision_paths=vision_paths,   # a locallens.backend.ModelPath
    embed_paths=embed_paths,     # a locallens.backend.ModelPath
    index_path="photos.index",
    loader=loader,               # returns a locallens.backend.ModelBackend
) as svc:
    svc.index.load()
    svc.index_folder("photos/holiday")
    for result in svc.search("kids playing on the beach", 3):
        print(f"{result.score:.4f}  {result.path}  {result.description}")
```

Leaving the `with` block calls `close()`, which unloads both models.
Images that fail to describe or embed are logged and skipped; the rest are
indexed and the index is saved at the end. `search` loads the embedding
model if needed and keeps it loaded until `close()`. Searching an empty
index returns an empty list.

Asking a `Describer` or `Embedder` to work before `load()` raises its
`ModelNotLoadedError`; embedding an empty string raises `EmptyTextError`.