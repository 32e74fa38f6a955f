# ordinals

Tools for ordinal theory. Every satoshi gets a serial number, and from that
number follow its name, degree, decimal notation, percentile and rarity.
The package also parses inscription ids, outpoints, satpoints, segwit
addresses and send targets, and reads inscription envelopes from taproot
witnesses. It has no dependencies outside the standard library.

## Installation

```
pip install .
```

With the test extra, to run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

List the first satoshi of every reward epoch, as JSON
(`{"starting_sats": [...]}`):

```
ordinals epochs
```

Parse an object written in any supported notation and print it as JSON
(`{"object": "..."}`):

```
ordinals parse nvtdijuwxlp
ordinals parse "1°0′0″0‴"
ordinals parse 1.1
ordinals parse 0%
```

Recognised notations are sat numbers, names, degrees, decimals,
percentiles, 32-byte hex hashes, inscription ids, outpoints, satpoints and
bech32/bech32m addresses with the `bc`, `tb` or `bcrt` prefix. On an
unparsable object the command prints `error: ...` to standard error and
exits with status 1.

## Library

### Sats — `ordinals.sat`

```python
from ordinals.sat import Sat

sat = Sat.parse("1°0′0″0‴")
print(sat.name())        # name in the a–z notation
print(sat.degree())      # 1°0′0″0‴
print(sat.decimal())     # <height>.<offset>
print(sat.percentile())  # e.g. 98.4375...%
print(sat.rarity())      # legendary
```

`Sat` is an `int` subclass. Besides `parse`, it offers `height()`,
`epoch()`, `cycle()`, `period()`, `third()`, `epoch_position()` and the
cheap `is_common()`. `Sat.SUPPLY` and `Sat.LAST` bound the range. The
module also has `epoch_subsidy`, `epoch_starting_sat`, `height_subsidy`,
`height_starting_sat` and `starting_sats`.

### Rarity — `ordinals.rarity`

`Rarity` is an ordered enum. `Rarity.parse("epic")` reads a name and
`Rarity.from_degree(degree)` classifies a degree:

| Rarity    | Meaning                                      |
|-----------|----------------------------------------------|
| common    | any sat that is not first in its block       |
| uncommon  | first sat of a block                         |
| rare      | first sat of a difficulty adjustment period  |
| epic      | first sat of a halving epoch                 |
| legendary | first sat of a cycle                         |
| mythic    | the first sat of the genesis block           |

### Identifiers and locations

- `ordinals.inscription_id.InscriptionId.parse("<64 hex>i<index>")`. It
  raises `InscriptionIdError`, whose `kind` is `character`, `length`,
  `separator`, `txid` or `index`.
- `ordinals.sat_point.OutPoint.parse("<txid>:<vout>")` and
  `SatPoint.parse("<txid>:<vout>:<offset>")`. `SatPoint.encode()` and
  `SatPoint.decode()` use the 44-byte consensus encoding.
- `ordinals.object.Object.parse(text)` picks the notation with
  `ordinals.representation.Representation` and parses the value. It
  returns an `Object` with a `kind` and a `value`.
- `ordinals.outgoing.parse_outgoing(text)` reads a send target: a
  `SatPoint`, an `InscriptionId`, or an `Amount` such as `"0 sat"`,
  `"0sat"` or `"1.5 BTC"`.

### Inscriptions — `ordinals.inscription`

```python
from ordinals.inscription import Inscription, ScriptBuilder, parse_witness

inscription = Inscription(content_type=b"text/plain;charset=utf-8", body=b"hello")
script = inscription.append_reveal_script(ScriptBuilder())
assert parse_witness([script, b""]) == [inscription]
```

`Inscription.from_transaction(witnesses)` collects the inscriptions of
every input as `TransactionInscription` records. `Inscription.from_file`
reads a file, takes its content type from the extension, and checks an
optional size limit. `parse_witness` raises `InscriptionError`; its `kind`
says why, for example an empty witness, a key-path spend or an
unrecognized even field.

### Media — `ordinals.media`

`content_type_for_path(path)` maps a file extension to a content type.
For `.mp4` files, `check_mp4_codec` first checks that every video track is
H.264. `Media.from_content_type` tells how a content type is displayed.

`ordinals.cli.list_ranges(outpoint, ranges)` describes sat ranges with the
size, rarity and name of each range.

## What it does not do

The package works without a node. It has no block index, no wallet and no
explorer server. It cannot find where a sat is now, list the sats of a
live output, make or send inscriptions, or show index statistics. The
command line has only `epochs` and `parse`.