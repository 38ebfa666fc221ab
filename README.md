# rpanel

rpanel is a small HTTP panel for a Linux host. It serves:

- CPU, memory and swap statistics, read from `/proc`;
- a listing of the entries of a directory under a configurable root;
- an image store where images can be uploaded, listed and downloaded.

It also has a few data types for describing task queues.

## Installing

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Running the server

```
rpanel
rpanel --host 0.0.0.0 --port 9000
```

`--host` defaults to `127.0.0.1` and `--port` to `8080`. The command serves
files from `/home` and images from `/mnt/Leven/img`. If the server cannot
start (for example, the port is taken), the reason is printed on stderr.
Every response carries the header `X-Version: 0.1`.

Every JSON reply has the same envelope:

```json
{"data": ..., "msg": "Success", "code": 0}
```

A `code` of `0` is sent with HTTP 200. An error is sent with its HTTP status,
with that same number in `code` and a description in `msg`. Unknown paths and
wrong methods get HTTP 404 with `{"data": null, "msg": "Not Found", "code": 404}`.

### Endpoints

| Method | Path                               | Reply                                                  |
|--------|------------------------------------|--------------------------------------------------------|
| GET    | `/v1/system_info/cpu`              | `cores`, and `usage` as a busy fraction 0.0 to 1.0     |
| GET    | `/v1/system_info/mem`              | `total_kb`, `used_kb`, `usage_ratio` of physical memory |
| GET    | `/v1/system_info/swap`             | `total_kb`, `used_kb`, `usage_ratio` of swap           |
| GET    | `/v1/file/?dir=NAME`               | Entries of `NAME` under the file root                  |
| GET    | `/v1/img/`                         | Names of the stored images                             |
| POST   | `/v1/img/`                         | Upload images (multipart field `file`)                 |
| GET    | `/v1/img/<name>`                   | The bytes of one image, as `image/<extension>`         |
| GET    | `/v1/img/delete/<path>/<dir>`      | The text `删除成功`; nothing is removed                 |

Notes:

- CPU usage is measured from two readings of `/proc/stat` taken 0.1 s apart.
  Memory usage prefers `MemAvailable` over `MemFree`.
- The file listing gives each entry's `name`, `size` (bytes, 0 for anything
  but regular files), `is_dir`, `created_at` and `modified_at` (Unix seconds,
  0 where unknown). Symbolic links are described as links. A missing `dir`,
  or a `page` / `page_size` that is not an unsigned integer, gives HTTP 400;
  these two are otherwise accepted but do not limit the listing. A directory
  that does not exist gives HTTP 404.
- Uploads must be `png`, `jpg`, `jpeg`, `gif` or `bmp` files. Each one is
  stored under a new random name and the reply lists those names. The first
  upload with another extension gives HTTP 400; uploads before it stay saved.
  The image directory is created if it is missing.

## Using it from Python

```python
from rpanel.server import create_app, Server
from rpanel.sysinfo import cpu_count, cpu_usage, get_mem_info, get_swap_info
from rpanel.file_api import list_directory
from rpanel.img_api import ImageStore

print(cpu_count(), cpu_usage())        # usage: 1000 means all CPU time busy
mem = get_mem_info()
print(mem.total_kb, mem.used_kb, mem.usage_ratio)

for entry in list_directory("/srv/files", "docs"):
    print(entry.to_dict())

store = ImageStore("/srv/img")
print(store.list().to_json())

app = create_app(file_root="/srv/files", image_root="/srv/img")
Server("127.0.0.1", 8080, file_root="/srv/files", image_root="/srv/img").run()
```

The `sysinfo` functions take the `/proc` file to read as an argument, so they
can be pointed at a copy. When a file cannot be read, `cpu_count` returns 1
and the others return zeros.

`rpanel.response.Response` is the reply envelope (`to_dict`, `to_json`,
`from_json`, `http_status`). `rpanel.errors` holds `AppError` and its
subclasses `AppIOError`, `InvalidParam`, `Unauthorized`, `NotFound` and
`UnknownError`; each has a `status_code` and a `to_response()` method.

### Task queue types

`rpanel.taskqueue` has:

- `Queue`, a name with a mapping of task names to handler identifiers;
- `CeleryApp`, holding a `broker_url` and queues, with `add_queue` and
  `get_queue` (which raises `KeyError` for an unknown name);
- `Task`, task metadata decoded with `Task.from_json`;
- `TaskFactory`, an abstract base whose `register(app)` adds to an app, and
  `register_all(factories, app)`;
- the errors `CeleryError`, `TaskNotFound`, `InvalidTaskParam` and
  `UnknownCeleryError`.

```python
from rpanel.taskqueue import CeleryApp, Queue

app = CeleryApp(broker_url="redis://localhost")
app.add_queue(Queue("default"))
app.get_queue("default").tasks["hello"] = "1"
```

## What it does not do

- The task queue types are bookkeeping only. Nothing connects to the broker,
  takes messages from a queue or runs tasks, and the package has no way of
  wrapping a function as a task handler that decodes JSON arguments.
- The image delete endpoint does not delete anything.
- There is no authentication; `Unauthorized` exists but no endpoint raises it.