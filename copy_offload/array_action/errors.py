import copy_offload.array_action.messages as messages


class BaseArrayActionException(Exception):

    def __str__(self, *args, **kwargs):
        return self.message


# =============================================================================
# System errors
# =============================================================================
class CredentialsError(BaseArrayActionException):

    def __init__(self, endpoint):
        super().__init__()
        self.message = messages.CREDENTIALS_ERROR_MESSAGE.format(endpoint)


class FailedToFindStorageSystemType(BaseArrayActionException):

    def __init__(self, array_type):
        super().__init__()
        self.message = messages.FAILED_TO_FIND_STORAGE_SYSTEM_TYPE_MESSAGE.format(array_type)


# =============================================================================
# Not found errors
# =============================================================================
class ObjectNotFoundError(BaseArrayActionException):

    def __init__(self, name):
        super().__init__()
        self.message = messages.OBJECT_NOT_FOUND_ERROR_MESSAGE.format(name)


class HostNotFoundError(BaseArrayActionException):

    def __init__(self, host_identifier):
        super().__init__()
        self.message = messages.HOST_NOT_FOUND_ERROR_MESSAGE.format(host_identifier)


class HostNotFoundByAdapterIdsError(HostNotFoundError):

    def __init__(self, adapter_ids):
        super().__init__(adapter_ids)
        self.adapter_ids = list(adapter_ids)
        self.message = messages.HOST_NOT_FOUND_BY_ADAPTER_IDS_ERROR_MESSAGE.format(self.adapter_ids)


# =============================================================================
# Invalid state errors
# =============================================================================
class InvalidStateError(BaseArrayActionException):

    def __init__(self, message):
        super().__init__()
        self.message = message


class MappingContextKeyMissingError(InvalidStateError):

    def __init__(self, key, initiator_group):
        message = messages.MAPPING_CONTEXT_KEY_MISSING_ERROR_MESSAGE.format(key, initiator_group)
        super().__init__(message)


class InvalidVolumeIdError(InvalidStateError):

    def __init__(self, volume_id):
        message = messages.INVALID_VOLUME_ID_ERROR_MESSAGE.format(volume_id)
        super().__init__(message)


class InvalidVolumeHandleError(InvalidStateError):

    def __init__(self, volume_handle, separator):
        message = messages.INVALID_VOLUME_HANDLE_ERROR_MESSAGE.format(volume_handle, separator)
        super().__init__(message)


# =============================================================================
# Mapping errors
# =============================================================================
class UnsupportedMappingError(BaseArrayActionException):

    def __init__(self, volume_id, host_cluster_id):
        super().__init__()
        self.message = messages.UNSUPPORTED_MAPPING_ERROR_MESSAGE.format(volume_id, host_cluster_id)


class UnresolvableVolumeMappingsError(UnsupportedMappingError):

    def __init__(self, volume_id, mappings_count):
        super().__init__(volume_id, None)
        self.message = messages.UNRESOLVABLE_VOLUME_MAPPINGS_ERROR_MESSAGE.format(volume_id, mappings_count)


class VolumeAlreadyUnmappedError(BaseArrayActionException):

    def __init__(self, volume_id_or_name):
        super().__init__()
        self.message = messages.VOLUME_ALREADY_UNMAPPED_MESSAGE.format(volume_id_or_name)


# =============================================================================
# Backend transport errors
# =============================================================================
class BackendTransportError(BaseArrayActionException):

    def __init__(self, operation, identifiers, err):
        super().__init__()
        self.operation = operation
        self.identifiers = identifiers
        self.message = messages.BACKEND_TRANSPORT_ERROR_MESSAGE.format(operation, identifiers, err)


class BackendRateLimitedError(BackendTransportError):

    def __init__(self, endpoint):
        super().__init__("rate limit", endpoint, None)
        self.message = messages.BACKEND_RATE_LIMITED_ERROR_MESSAGE.format(endpoint)


class MappingError(BackendTransportError):

    def __init__(self, volume_id_or_name, host, err):
        super().__init__("map", (volume_id_or_name, host), err)
        self.message = messages.MAPPING_ERROR_MESSAGE.format(volume_id_or_name, host, err)


class UnmappingError(BackendTransportError):

    def __init__(self, volume_id_or_name, host, err):
        super().__init__("unmap", (volume_id_or_name, host), err)
        self.message = messages.UNMAPPING_ERROR_MESSAGE.format(volume_id_or_name, host, err)


class GroupSetupError(BackendTransportError):

    def __init__(self, initiator_group, err):
        super().__init__("ensure initiator group", initiator_group, err)
        self.message = messages.GROUP_SETUP_ERROR_MESSAGE.format(initiator_group, err)
