import os
from dotenv import load_dotenv

load_dotenv()

# logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# summarizer: precedence between contributors writing the same field
# ("last-writer-wins" | "first-writer-wins")
SUMMARY_PRECEDENCE = os.getenv("SUMMARY_PRECEDENCE", "last-writer-wins")

# summarizer: ordered, comma separated list of contributor names
SUMMARY_CONTRIBUTORS = [
    name.strip()
    for name in os.getenv("SUMMARY_CONTRIBUTORS", "files,license_files,registry").split(",")
    if name.strip()
]
