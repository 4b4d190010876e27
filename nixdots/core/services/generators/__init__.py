"""
Generators — produce the dotfiles repository from Settings.

Each generator returns ``GeneratedFile`` instances; writing them is the
setup use case's job.
"""
