def read(options, meta):
    raise AssertionError("hidden controllers must never load")
