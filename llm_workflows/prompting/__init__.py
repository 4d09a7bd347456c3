"""Prompting package.

This package contains deterministic prompt-construction helpers (`prompt_builder`)
and validated `{placeholder}` templates (`templates`). It does not perform
routing, tag parsing, or model invocation.
"""
