# swctl

`swctl` is a helper library for an observability backend's query service, with a
small command line tool. It checks and normalises the options a user types:
time ranges, entity ids and names, event parameters, alarm, event and log
conditions, and Kubernetes manifest overlays. The result is plain Python
objects that are ready to send to the backend.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
swctl --help
swctl --version
swctl completion bash
swctl completion powershell
```

`swctl completion bash` (alias `b`) and `swctl completion powershell` (alias
`p`) print a shell completion script. To enable completion in bash:

```
swctl completion bash > swctl-completion.bash
PROG=swctl source swctl-completion.bash
```

The scripts ask `swctl` for candidates by adding the hidden
`--auto_complete` option. The candidates are the command names and aliases
known at the current level. After a `-` at the top level, the candidates are
the global options.

Global options:

| Option | Default |
| --- | --- |
| `--config` | `~/.skywalking.yml` |
| `--base-url` | `http://127.0.0.1:12800/graphql` |
| `--grpc-addr` | `127.0.0.1:11800` |
| `--username`, `--password`, `--authorization` | empty |
| `--timezone` | empty |
| `--debug` | off |
| `--display` | empty |

Before a command runs, `swctl` expands `~` in `--config` and reads the file
as YAML. Its top-level keys are the option names without dashes, for example
`base-url: http://localhost:12800/graphql`. A value from the file applies
only where the option was not given on the command line. A missing file is
skipped. A file that does not hold a mapping, or is not valid YAML, makes the
command fail with exit status 1. `--debug` switches on debug logging.

## Library

### Time ranges (`swctl.duration`)

```python
from swctl.duration import Step, parse_duration, align_precision, format_time

start, end, step, kind = parse_duration("2019-11-11", "", Step.MINUTE)
# step is Step.DAY, end is 30 days after start, kind is DurationType.END_ABSENT

align_precision("2019-01-01 1200", "2019-01-01")  # ("2019-01-01", "2019-01-01")
```

- Absolute times are written `YYYY-MM-DD`, `YYYY-MM-DD HH`,
  `YYYY-MM-DD HHMM` or `YYYY-MM-DD HHMMSS`. The format sets the `Step`
  (`DAY`, `HOUR`, `MINUTE`, `SECOND`).
- Relative times such as `-1h30m` or `300ms` are added to now, and the
  caller's step is kept. `parse_go_duration` parses them into a `timedelta`.
- When neither end of the range is given, it is the last 30 minutes. When
  only one end is given, the other is 30 steps away from it.
- `try_parse_time` parses a single time. `format_time` formats a `datetime`
  at a step's precision. `QueryDuration` holds a formatted `start`, `end` and
  `step`.
- `timezone_offset("+0800")` gives a fixed `datetime.timezone`. Only whole
  hours are kept, and text that is not an integer gives `None`.
  `choose_timezone(explicit, server_timezone)` prefers the user's value.

### Entity identifiers (`swctl.identifiers`, `swctl.processes`)

```python
from swctl.identifiers import parse_service_id, resolve_endpoint

parse_service_id("cHJvdmlkZXI=.1")  # ("provider", True)

flags = {"service-id": "cHJvdmlkZXI=.1", "endpoint-name": "/users"}
resolve_endpoint(flags, required=True)
# flags now also holds "service-name" and "endpoint-id"
```

Each of the functions below works on a mutable mapping of flag names. It
fills in whichever of the id and the name is missing:

- `resolve_service`
- `resolve_service_relation`
- `resolve_endpoint`
- `resolve_endpoint_relation`
- `resolve_instance`
- `resolve_instance_relation`
- `resolve_page`
- `resolve_version`

A service name alone is turned into an id by the `lookup` callable you pass
in. Errors raise `FlagError`, a subclass of `ValueError`.

In `swctl.processes`:

- `process_id(instance_id, name)` derives a process id.
- `resolve_process` and `resolve_process_relation` fill in `process-id`.
  `resolve_process_relation` also checks for `dest-process-name` when it is
  required.

### Events and alarms (`swctl.events`, `swctl.params`)

```python
from swctl.params import parse_parameters

parse_parameters(["key=value", "k=v==="])  # {"key": "value", "k": "v==="}
```

- `parse_alarm_tags` reads `key=value,key=value` into a list of pairs.
- `build_alarm_condition` returns an `AlarmCondition`.
- `build_event_query` returns an `EventQuery`. The layer is upper-cased, and
  `EventType.ALL` leaves the event type open.
- `build_event_report` returns an `EventReport`. It generates a random uuid
  when none is given, requires a layer, and reads the `key=value`
  parameters.
- Every query uses `Pagination(page_num=1, page_size=15)`.

### Logs and instances (`swctl.queries`)

- `build_log_query` returns a `LogQuery`, and `parse_log_tags` parses its
  `key=value,...` tags.
- `build_browser_log_query` returns a `BrowserLogQuery`.
- `filter_instances(instances, regex)` keeps the mappings or objects whose
  `name` matches the pattern. An invalid pattern matches nothing.

### Assets and manifests (`swctl.assets`, `swctl.manifest`)

- `read_asset(path)` reads a text file and drops its leading block of `#`
  lines. `strip_leading_comments` does the same for a string.
- `example_text(content)` renders a configuration example for help text.
- `swctl.manifest.usage(command, example_overlays)` builds the examples
  section of an install manifest command's help.
- `swctl.manifest.load_overlay(file, stream)` loads a YAML overlay from a
  file. With `-` it reads from a stream, or standard input when no stream is
  given.

## What this package does not do

The package has no client for the backend. It sends no GraphQL or gRPC
requests, so it does not list or query services, instances, endpoints,
metrics, traces, logs, alarms or events. It does not report events, check
the backend's health, draw dashboards, or render output as JSON, YAML,
tables or graphs. It does not generate or apply Kubernetes manifests. The
command line tool offers only the `completion` command. Options such as
`--base-url`, `--grpc-addr` and `--display` are accepted and read from the
configuration file, but nothing uses them yet.