from copy_offload.array_action import errors as array_errors
from copy_offload.common import settings
from copy_offload.common.copy_offload_logger import get_stdout_logger

logger = get_stdout_logger()


def split_volume_handle(volume_handle):
    """
    Args
        volume_handle : <system id>-<volume id>
    Return
        system id, volume id
    Raises
        InvalidVolumeHandleError
    """
    logger.debug("splitting volume handle : {0}".format(volume_handle))
    separator = settings.VOLUME_HANDLE_SEPARATOR
    if not volume_handle or separator not in volume_handle:
        raise array_errors.InvalidVolumeHandleError(volume_handle, separator)
    system_id, volume_id = volume_handle.split(separator, 1)
    if not system_id or not volume_id:
        raise array_errors.InvalidVolumeHandleError(volume_handle, separator)
    return system_id, volume_id


def get_volume_attribute(volume_attributes, key):
    if not volume_attributes:
        return None
    return volume_attributes.get(key) or None
