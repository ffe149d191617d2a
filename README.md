# passtek

`passtek` reads a list of cracked passwords, and optionally the pwdump-style
hash file they came from, and computes statistics on them: length spread,
character-class complexity, character patterns, the most common base words
(with leet-speak undone), password reuse, LM and empty NTLM hashes, accounts
whose password is their user name, and an overall risk level. It writes the
results as a plain-text report.

## Installation

```
pip install .
```

## Command line

```
passtek -p passwords.txt -H hashes.txt -l en -o output -f text
```

Options:

- `-p`: the password file, one plaintext password per line. It is required
  and must hold at least two passwords.
- `-H`: a hash file with lines of the form `username:rid:lmhash:nthash:::`.
  Without it, the hash statistics are derived from the cracked passwords alone
  and a warning is printed. With it, the command fails if the hash file holds
  fewer entries than the password file.
- `-l`: the language of the labels (`fr` by default).
- `--lang-dir`: the directory holding the label files (`lang` by default).
  The file `<lang-dir>/<lang>.json` must exist; it provides every heading and
  row label of the report and the names of the risk levels.
- `-o`: the output directory (`output` by default). It must lie inside the
  current working directory and is created if missing.
- `-f`: output types, comma separated (`all` by default). `text` and `all`
  both write `report.txt` into the output directory.
- `-anon`: mask the passwords shown in the reuse ranking, keeping only the
  first two and last two characters.
- `-min`: the minimum length for a token to be counted as a word (5 by
  default).
- `-top`: how many entries to show in each ranking (5 by default).
- `-L`, `-cL`: company and client logo files. They are read and stored
  base64-encoded with the labels; the command fails if they cannot be read.
  The text report does not show them.

The command exits with status 0 on success and 1 on error, printing the
reason to standard error.

## As a library

```python
from passtek.analysis import analyze_passwords, analyze_hashes, evaluate_risk
from passtek.report_text import render_text, to_text
from passtek.utils import load_labels, percent

data = analyze_passwords("passwords.txt", 5)
stats = data.stats
stats.hashes = analyze_hashes("hashes.txt")
labels = load_labels("lang/en.json")

print(render_text(stats, 5, labels))
to_text(stats, "output", 5, labels)  # writes output/report.txt
```

- `passtek.analysis.analyze_passwords` returns a `Data` value and raises
  `AnalysisError` when the file holds fewer than two passwords.
- `analyze_hashes` returns a `HashStats` with total, unique, reused, empty
  NTLM and LM hash counts.
- `evaluate_risk(lang, *percentages, lang_dir="lang")` averages the given
  percentages and returns the localised risk level with the score.
- `ntlm_hash` computes the NTLM hash of a string, and `username_as_pass`
  lists the accounts of a hash file whose password is their own user name.
- `passtek.utils` holds the helpers: `percent`, `sort_map_by_value_desc`,
  `merge_into_smaller`, `mask_password`, `mask_stats`, `sanitize_stats`,
  `image_to_base64`, `resize_and_base64` and `load_labels`.
- `passtek.models.Labels.from_dict` builds the label set from a decoded
  language JSON document.

## What it does not do

Only the plain-text report is produced. Asking for `html`, `excel`,
`screenshot` or `pdf` output makes the command stop with "Output type not
supported"; there are no charts, workbooks, rendered pages or images. No
label files ship with the package: the language file named by `-l` and
`--lang-dir` has to be supplied.