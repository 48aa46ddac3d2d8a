# asterproxy

The routing core of a caching proxy for Redis Cluster, standalone Redis
and Memcache servers. It works out which backend each request belongs to
and keeps that routing state up to date. The package has no
dependencies beyond the standard library.

## Modules

- `asterproxy.crc` has `crc16`, the CRC16-CCITT (XMODEM) checksum that
  Redis Cluster uses to map keys to slots.
- `asterproxy.fnv` has `fnv1a64` and the incremental `Fnv1a64` hasher
  (`update`, `digest`). It is an FNV-1a variant that folds its state to
  32 bits and is used to place keys on the ketama ring.
- `asterproxy.ketama` has `HashRing`, a weighted consistent-hash ring with
  `add_node`, `del_node` and `get_node`. `get_node` returns `None` when the
  ring is empty. If the node and weight lists differ in length,
  `RingConfigError` is raised.
- `asterproxy.slots` has `SlotTable`, which maps each cluster slot to a
  master and a list of replicas.
  - Reads go to the replicas in round-robin order when `read_from_slave`
    is set.
  - `try_update_all` replaces the whole layout and `update_slot` moves a
    single slot.
  - `get_addr` and `all_addrs` choose where commands are sent.
  - `slot_for_key` hashes a key to its slot and honours a two-byte hash
    tag such as `{}`.
- `asterproxy.trigger` has `SingleFlightTrigger` and `TriggerBy`.
  - The trigger puts layout-refresh requests onto a `queue.Queue`, at most
    once per interval.
  - Before the interval has passed, a request is still let through when the
    attempt count reaches a power of two from 16 to 65536.
- `asterproxy.redirect` has `Redirect`, `RedirectKind`, `Redirection` and
  `apply_redirect`.
  - A `MOVED` redirection points the slot at its new master in a
    `SlotTable`.
  - An `ASK` redirection leaves the table unchanged.
- `asterproxy.servers` reads standalone server lines of the form
  `host:port[:weight] [alias]`.
  - `parse_servers` returns `ServerLine` values.
  - `unwrap_spots` splits those lines into addresses, aliases and weights.
  - `build_layout` returns a `ServerLayout`, whose `route` maps a key hash
    to a backend address, going through the alias when aliases are
    configured.
- `asterproxy.health` has `PingHealth` and `PingAction`. `PingHealth.record`
  counts consecutive ping failures and returns the actions to take: remove
  the node, add it back, or reconnect.
- `asterproxy.versions` has `ConfigVersions`, a thread-safe numbered
  history of configurations. `publish` skips a configuration that is equal
  to the current one.
- `asterproxy.notify` has `Notify`, a handle whose clones share one wake-up
  callable and one 16-bit counter.
- `asterproxy.utils` holds small helpers: `trim_hash_tag`, `upper`, `itoa`,
  `find_lf` and `Range`.

## Examples

```python
import queue

from asterproxy.crc import crc16
from asterproxy.fnv import fnv1a64
from asterproxy.ketama import HashRing
from asterproxy.servers import build_layout
from asterproxy.slots import SlotTable, slot_for_key
from asterproxy.trigger import SingleFlightTrigger

crc16(b"123456789")                  # 0x31C3
slot_for_key(b"{user}:1", b"{}")     # same slot as b"user"

ring = HashRing(["mc-1", "mc-2"], [10, 10])
ring.get_node(fnv1a64(b"a"))         # "mc-1" or "mc-2"

layout = build_layout(["10.0.0.1:11211:10 mc-1", "10.0.0.2:11211:10 mc-2"])
layout.route(fnv1a64(b"key"))        # "10.0.0.1:11211" or "10.0.0.2:11211"

table = SlotTable()
table.try_update_all(["10.0.0.1:7000"] * 16384, [[] for _ in range(16384)])
table.get_addr(slot_for_key(b"key"), is_read=True)   # "10.0.0.1:7000"

trigger = SingleFlightTrigger(1.0, queue.Queue(maxsize=1024))
trigger.try_trigger()
```

## What this package does not do

This package only decides where requests go. It does not do any of the
following:

- open sockets or accept client connections;
- speak the Redis or Memcache wire protocols;
- read configuration files or watch them for changes;
- provide a command to run a proxy.

Those parts are left to the program that uses these modules.

## Running the tests

```
pip install -e .[test]
pytest
```