import itertools

def flat_map(f, li):
    return list(itertools.chain.from_iterable(map(f, li)))

# Order-preserving, so tables built from it are stable between runs
def unique(array):
    return list(dict.fromkeys(array))

# "position/token", unique within a phrase even when a word repeats
def position_labels(tokens, source_id=None):
    prefix = f"{source_id}/" if source_id is not None else ""

    return [ f"{prefix}{position}/{token}" for position, token in enumerate(tokens) ]
