from errors import MalformedChunk


def get_tag(compound, key: str, tag_type, required=True):
    '''
    look up key in a TAG_Compound and check its tag type
    return: the tag, or None if it's missing and not required
    '''
    if key not in compound:
        if required:
            raise MalformedChunk(f"{key} doesn't exist")
        return None
    tag = compound[key]
    if not isinstance(tag, tag_type):
        raise MalformedChunk(f"{key} should be {tag_type.__name__}, got {type(tag).__name__}")
    return tag
