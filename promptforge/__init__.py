"""PromptForge: prompt compilation and generated-file extraction.

Compiles prompt templates into the text sent to an AI backend, and parses
the backend's reply back into a set of files for a project scaffold.

Quick usage::

    from promptforge import EngineConfig, PromptEngineManager, extract_files

    manager = await PromptEngineManager.create(EngineConfig())
    prompt = manager.compile_project_prompt("shop", "An online shop", "antd", ["routing"])
    reply = await transport.send(prompt.content)   # external collaborator
    files = extract_files(reply)
"""

from promptforge.config import EngineConfig
from promptforge.extraction import extract_files, parse_generated_output
from promptforge.prompts import PromptContext, PromptEngineManager

__version__ = "1.0.0"

__all__ = [
    "EngineConfig",
    "PromptEngineManager",
    "PromptContext",
    "extract_files",
    "parse_generated_output",
]
