"""
Clack Chat Client

A line-oriented console chat client implementing:
- A closed family of typed messages (text, file, help, logout, list users)
- A small command grammar turning typed lines into messages
- File transfer of text files into the working directory
- Caesar-cipher obfuscation of message payloads on the wire
"""

__version__ = "1.0.0"
