from copy_offload.array_action.settings import IQN_PREFIX, NAA_PREFIX, NAA_INFINIBOX_PREFIX, ISCSI_CONNECTIVITY_TYPE
from copy_offload.common.copy_offload_logger import get_stdout_logger

logger = get_stdout_logger()


def generate_lun_iqn(serial_number, storage_protocol):
    """
    iscsi volumes are addressed by iqn.<serial>, any other protocol by naa.<serial>
    """
    protocol_prefix = IQN_PREFIX if storage_protocol == ISCSI_CONNECTIVITY_TYPE else NAA_PREFIX
    return "{0}.{1}".format(protocol_prefix, serial_number)


def generate_lun_naa(serial_number):
    return "{0}{1}".format(NAA_INFINIBOX_PREFIX, serial_number)


def convert_wwn_to_naa(wwn):
    naa = "{0}.{1}".format(NAA_PREFIX, wwn.lower())
    logger.debug("naa of wwn : {0} is : {1}".format(wwn, naa))
    return naa


def convert_volume_id_to_int(volume_id):
    try:
        return int(volume_id)
    except (TypeError, ValueError):
        return None


class ClassProperty:

    def __init__(self, function):
        self._function = function

    def __get__(self, instance, owner):
        return self._function(owner)
