from copy_offload.common.config import config

FC_CONNECTIVITY_TYPE = config.connectivity_type.fc
ISCSI_CONNECTIVITY_TYPE = config.connectivity_type.iscsi

FC_ADAPTER_ID_PREFIX = config.adapter_id.fc_prefix
WWPN_HEX_LENGTH = config.adapter_id.wwpn_hex_length

IQN_PREFIX = config.lun.iqn_prefix
NAA_PREFIX = config.lun.naa_prefix
NAA_INFINIBOX_PREFIX = config.lun.naa_infinibox_prefix

# mapping context fields
CONTEXT_HOST_ID = "host_id"
CONTEXT_REAL_HOST_NAME = "real_host_name"
CONTEXT_MAPPED_HOST_NAME = "mapped_host_name"
