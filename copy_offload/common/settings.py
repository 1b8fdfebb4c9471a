from copy_offload.common.config import config

ARRAY_TYPE_PAR3 = config.array_type.par3
ARRAY_TYPE_POWERFLEX = config.array_type.powerflex
ARRAY_TYPE_INFINIBOX = config.array_type.infinibox
ALL_ARRAY_TYPES = [ARRAY_TYPE_PAR3, ARRAY_TYPE_POWERFLEX, ARRAY_TYPE_INFINIBOX]

VOLUME_HANDLE_SEPARATOR = config.volume_handle.separator
VOLUME_ATTRIBUTE_NAME_KEY = config.volume_attributes.name
VOLUME_ATTRIBUTE_STORAGE_PROTOCOL_KEY = config.volume_attributes.storage_protocol
