# ada_babel.runner: external tool orchestration
#
# Modules:
#   process.py   Synchronous subprocess call, returns a ToolResult variant
#   compiler.py  Execute path (compile with gnatmake, then run the binary)
#   prover.py    Prove path (one-file project descriptor + gnatprove)
