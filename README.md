# cinnabar

Building blocks for a small continuous-integration service: the pipeline
and trigger model, decoding of source-control webhook deliveries into
triggers, and SQLite storage of pipeline records. The package has no
dependencies outside the standard library.

## Modules

### `cinnabar.image_reference`

`DockerImageReference` is a frozen dataclass with `hostname`, `repository`
and `tag`. `DockerImageReference.parse(value)` reads a string of the form
`[<hostname>/]<repository>[:<tag>]`. The part before the first `/` counts as
a hostname only when it contains `.` or `:`, or is `localhost`. `str()` of a
reference gives the string form back.

### `cinnabar.trigger`

- `Branch(name, commit)`, `PushEvent(branch)`,
  `PullRequestEvent(source, target)` and
  `Trigger(repository_owner, repository_name, installation_id, event)`
  describe an event in a repository.
- `PushTriggerConfiguration(branch=None)` and
  `PullRequestTriggerConfiguration(target=None, source=None)` say which
  events start a pipeline. Their `matches(trigger)` method checks an event
  against them. A field left as `None` matches any branch. Both have
  `to_dict()`.
- `parse_trigger_configuration(data)` builds one of the two from a mapping
  tagged by its `"event"` key (`"push"` or `"pull_request"`). It raises
  `ValueError` when the key is missing, the variant is unknown or a field
  has the wrong type.

### `cinnabar.pipeline`

- `PipelineStatus` is an enum with the members `PENDING`, `RUNNING`,
  `PASSED` and `FAILED`. Each value is its lower-case text form.
  `PipelineStatus.parse(value)` raises `ValueError` for any other text.
- `StepConfiguration(name, image, commands=None, cache=None)` and
  `PipelineConfiguration(name, trigger, steps)` both have `from_dict(data)`
  and `to_dict()`, for use with decoded JSON. `from_dict` raises
  `ValueError` for missing fields or fields of the wrong type.
- `Pipeline.from_configuration(pipeline_id, configuration)` creates a
  pending `Pipeline`. Its `Step`s are numbered from 1 and are pending too.

### `cinnabar.repository`

`PipelinesRepository(database_url)` opens a SQLite database and creates the
`pipelines` table if it does not exist. A URL starting with `file:` is opened
as a URI. `create_new()` inserts a pending pipeline and returns its integer
id. `close()` closes the connection, and the repository can also be used as a
context manager. Database failures raise `RepositoryError`.

### `cinnabar.webhook`

`parse_trigger(headers, body)` reads the `x-github-event` header, matched
case-insensitively, and the JSON body of a delivery. It returns:

- a `Trigger` for a push to a branch that has a head commit;
- a `Trigger` for a pull request whose action is `opened`, `reopened` or
  `synchronize`;
- `None` for any other event or action.

It raises `WebhookError` when the header is missing
(`"Missing header x-github-event"`), the header is not printable ASCII
(`"Failed to parse event"`), or the payload is malformed
(`"Failed to parse payload"`). The text is also available as the error's
`message` attribute. `parse_ref(value)` removes a `refs/heads/` or
`refs/tags/` prefix from a git ref.

## Example

```python
from cinnabar.image_reference import DockerImageReference
from cinnabar.trigger import Branch, PushEvent, Trigger, parse_trigger_configuration

image = DockerImageReference.parse("host.com/repo/image:1.0")
print(image.hostname, image.repository, image.tag)  # host.com repo/image 1.0

config = parse_trigger_configuration({"event": "push", "branch": "main"})
trigger = Trigger(
    repository_owner="Owner",
    repository_name="Repo",
    installation_id=789,
    event=PushEvent(branch=Branch(name="main", commit="123")),
)
print(config.matches(trigger))  # True
```

## What it does not do

This package is a library only. It does not provide any of the following:

- an HTTP server that receives webhooks;
- checking of webhook signatures, so `parse_trigger` expects a body that has
  already been verified;
- a client for the source-control host;
- reading of pipeline files from a repository;
- a runner that pulls images and runs steps in containers.

## Running the tests

```
pip install -e ".[test]"
pytest
```