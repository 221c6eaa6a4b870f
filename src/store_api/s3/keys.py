"""Object key layout under the configured base path."""

UPLOAD_PREFIX = "upload/"


def build_object_key(
    base_path: str,
    name: str,
    part: str = "",
    idx: str = "",
    upload_area: bool = False,
) -> str:
    """
    Build `{base_path}[upload/][{part}/{idx}/]{name}`.

    The `{part}/{idx}/` segment is only added when both are non-empty. Upload
    URLs and listings live under `upload/`; download and delete URLs do not.
    """
    key = base_path
    if upload_area:
        key += UPLOAD_PREFIX
    if part and idx:
        key += f"{part}/{idx}/"
    return key + name
