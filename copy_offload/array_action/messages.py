CREDENTIALS_ERROR_MESSAGE = "Credential error has occurred while connecting to endpoint : {0} "

FAILED_TO_FIND_STORAGE_SYSTEM_TYPE_MESSAGE = "Could not identify the storage system type : {0} "

OBJECT_NOT_FOUND_ERROR_MESSAGE = "Object was not found : {0} "

HOST_NOT_FOUND_ERROR_MESSAGE = "Host : {0} was not found on storage"

HOST_NOT_FOUND_BY_ADAPTER_IDS_ERROR_MESSAGE = "No host found with adapter ids : {0}, " \
                                              "ensure the clonner host ports are configured on storage"

MAPPING_CONTEXT_KEY_MISSING_ERROR_MESSAGE = "Mapping context is missing : {0} , required for initiator group : {1}"

INVALID_VOLUME_ID_ERROR_MESSAGE = "Invalid volume id : {0} , expected a numeric volume id"

INVALID_VOLUME_HANDLE_ERROR_MESSAGE = "Invalid volume handle : {0} , expected format <system id>{1}<volume id>"

UNSUPPORTED_MAPPING_ERROR_MESSAGE = "Volume : {0} is mapped to host cluster : {1} , cluster mappings are not supported"

UNRESOLVABLE_VOLUME_MAPPINGS_ERROR_MESSAGE = "Volume : {0} has {1} mapping(s) but none of them could be resolved " \
                                             "to a host"

BACKEND_TRANSPORT_ERROR_MESSAGE = "Storage request failed. operation : {0} , identifiers : {1} . error : {2}"

BACKEND_RATE_LIMITED_ERROR_MESSAGE = "Storage endpoint : {0} rejected the request because of rate limiting"

MAPPING_ERROR_MESSAGE = "Mapping error has occurred while mapping volume : {0} to host : {1}. error : {2}"

VOLUME_ALREADY_UNMAPPED_MESSAGE = "Volume: {0} is already unmapped."

UNMAPPING_ERROR_MESSAGE = "Unmapping error has occurred for volume : {0} and host : {1}. error : {2}"

GROUP_SETUP_ERROR_MESSAGE = "Failed to set up initiator group : {0} . error : {1}"
