"""
ada_babel: evaluate Ada/SPARK source blocks embedded in literate documents.

Each block is either compiled and run (gnatmake) or proved (gnatprove), and
whatever the tool prints becomes the block's result.

Pipeline per block:
  options → BlockParams → expanded body → temp artifacts → external tool

Input:  block body + block options
Output: EvalResult (stage reached, tool status, captured output)
"""
