"""Starter .gitscope.toml template."""

DEFAULT_TOML = """\
# gitscope configuration
version = "1.0"

[git]
executable = "git"
remote = "origin"         # remote used for ahead/behind, remote info and push

[diff]
# binary_extensions = [".psd", ".sqlite"]   # added to the built-in list
sniff_bytes = 512         # leading bytes checked for NUL

[output]
format = "terminal"       # terminal | json | yaml
show_summary = true

[logging]
level = "warning"         # debug | info | warning | error
"""
