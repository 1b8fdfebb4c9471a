import re
from dataclasses import dataclass, field

import copy_offload.array_action.errors as array_errors
from copy_offload.array_action import settings as array_settings
from copy_offload.common.copy_offload_logger import get_stdout_logger

logger = get_stdout_logger()

_NON_HEX_CHARACTERS = re.compile('[^0-9a-f]')


def is_fc_adapter_id(adapter_id):
    return adapter_id.lower().startswith(array_settings.FC_ADAPTER_ID_PREFIX)


def normalize_wwn(wwn):
    """
    Args:
        wwn : world wide name in any notation, e.g. "21:00:00:11:22:33:44:55" or "0x2100001122334455"
    Return
        lower case hex digits only, e.g. "2100001122334455"
    """
    wwn = wwn.lower()
    if wwn.startswith('0x'):
        wwn = wwn[2:]
    return _NON_HEX_CHARACTERS.sub('', wwn)


def extract_wwpn(adapter_id):
    """
    Args:
        adapter_id : fc adapter id, "fc.<wwnn>:<wwpn>" or "fc.<wwpn>"
    Return
        normalized port name (the last wwn of the adapter id)
    Raises
        ValueError
    """
    if not is_fc_adapter_id(adapter_id):
        raise ValueError("not a fc adapter id : {0}".format(adapter_id))
    raw_wwns = adapter_id[len(array_settings.FC_ADAPTER_ID_PREFIX):]
    normalized_wwns = normalize_wwn(raw_wwns)
    if len(normalized_wwns) < array_settings.WWPN_HEX_LENGTH:
        raise ValueError("adapter id {0} does not contain a wwpn".format(adapter_id))
    return normalized_wwns[-array_settings.WWPN_HEX_LENGTH:]


def compare_wwns(wwn, other_wwn):
    normalized_wwn = normalize_wwn(wwn)
    return bool(normalized_wwn) and normalized_wwn == normalize_wwn(other_wwn)


def _to_comparable_wwn(address):
    if is_fc_adapter_id(address):
        try:
            return extract_wwpn(address)
        except ValueError:
            return None
    return normalize_wwn(address)


def is_adapter_id_match(adapter_id, port_address):
    """
    fc adapter ids are compared to the port address by their normalized wwpn,
    any other protocol is compared literally.
    """
    if is_fc_adapter_id(adapter_id) or is_fc_adapter_id(port_address):
        wwpn = _to_comparable_wwn(adapter_id)
        other_wwpn = _to_comparable_wwn(port_address)
        return bool(wwpn and other_wwpn) and compare_wwns(wwpn, other_wwpn)
    return adapter_id == port_address


@dataclass
class AdapterIdentifiers:
    """
    Object containing the clonner host adapter ids (e.g. fc.<wwnn>:<wwpn>, iqn)
    """
    adapter_ids: list = field(default_factory=list)

    def __post_init__(self):
        self.adapter_ids = self._filter_empty_parts(self.adapter_ids)

    def _filter_empty_parts(self, adapter_ids):
        adapter_ids = [adapter_id.strip() for adapter_id in adapter_ids]
        adapter_ids = filter(None, adapter_ids)
        return list(adapter_ids)

    def __iter__(self):
        return iter(self.adapter_ids)

    def __bool__(self):
        return bool(self.adapter_ids)

    @property
    def fc_wwpns(self):
        wwpns = []
        for adapter_id in self.adapter_ids:
            if is_fc_adapter_id(adapter_id):
                try:
                    wwpns.append(extract_wwpn(adapter_id))
                except ValueError as ex:
                    logger.warning("skipping adapter id : {0}. {1}".format(adapter_id, ex))
        return wwpns

    @property
    def other_ids(self):
        return [adapter_id for adapter_id in self.adapter_ids if not is_fc_adapter_id(adapter_id)]

    def get_matching_adapter_id(self, port_address):
        for adapter_id in self.adapter_ids:
            if is_adapter_id_match(adapter_id, port_address):
                return adapter_id
        return None

    def find_matching_host(self, hosts):
        """
        Args:
            hosts : array hosts, iterated in the given order
        Return
            the first (host, port) whose port matches one of the adapter ids
        Raises
            HostNotFoundByAdapterIdsError
        """
        for host in hosts:
            for port in host.ports:
                adapter_id = self.get_matching_adapter_id(port.address)
                if adapter_id:
                    logger.info("found host : {0} with adapter id : {1} (port address : {2})".format(
                        host.name, adapter_id, port.address))
                    return host, port
        raise array_errors.HostNotFoundByAdapterIdsError(self.adapter_ids)
