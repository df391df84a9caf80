"""Page level organisation tools: rotate and delete."""
