from hpe3parclient import exceptions as hpe3par_exceptions

from copy_offload.array_action.array_action_types import Host, Port
from copy_offload.array_action.par3_rest_client import (HOST_SET_PREFIX, Par3Client, generate_volume_mappings,
                                                      from_vlun_hostname)


def _not_found(description):
    return hpe3par_exceptions.HTTPNotFound({'desc': description})


def _conflict(description):
    return hpe3par_exceptions.HTTPConflict({'desc': description})


class FakePar3Client(Par3Client):
    """
    In-memory 3PAR/Primera backend. Volumes are dicts as returned by getVolume.
    VLUNs are records as returned by getVLUNs: one template per export and one active vlun per exported host.
    """

    def __init__(self):
        self.volumes = {}
        self.hosts = {}
        self.host_sets = {}
        self.vluns = []
        self.last_lun = 0
        self.created_hosts = []
        self.logged_out = False

    def add_volume(self, name, volume_id, wwn):
        self.volumes[name] = {'name': name, 'id': volume_id, 'wwn': wwn}

    def add_host(self, name, fc_wwns=(), iscsi_names=()):
        ports = [Port(address=wwn, protocol="fc") for wwn in fc_wwns]
        ports.extend(Port(address=iscsi_name, protocol="iscsi") for iscsi_name in iscsi_names)
        self.hosts[name] = Host(id=name, name=name, ports=ports)

    def add_vlun(self, volume_name, hostname, lun, active=False):
        self.vluns.append({'volumeName': volume_name, 'hostname': hostname, 'lun': lun, 'active': active})

    def templates(self):
        return [vlun for vlun in self.vluns if not vlun['active']]

    def logout(self):
        self.logged_out = True

    def get_volume(self, volume_name):
        if volume_name not in self.volumes:
            raise _not_found("volume does not exist")
        return dict(self.volumes[volume_name])

    def get_hosts(self):
        return list(self.hosts.values())

    def create_host(self, host_name, fc_wwns, iscsi_names):
        if host_name in self.hosts:
            raise _conflict("host name is already used")
        self.add_host(host_name, fc_wwns, iscsi_names)
        self.created_hosts.append(host_name)

    def get_host_sets(self):
        return [Host(id=name, name=name) for name in self.host_sets]

    def get_host_set_members(self, host_set_name):
        if host_set_name not in self.host_sets:
            raise _not_found("host set does not exist")
        return list(self.host_sets[host_set_name])

    def create_host_set(self, host_set_name):
        if host_set_name in self.host_sets:
            raise _conflict("host set already exists")
        self.host_sets[host_set_name] = []

    def add_host_to_host_set(self, host_set_name, host_name):
        self.host_sets[host_set_name].append(host_name)

    def get_volume_vluns(self, volume_name):
        return generate_volume_mappings(self.vluns, volume_name)

    def _target_exists(self, hostname):
        if hostname.startswith(HOST_SET_PREFIX):
            return from_vlun_hostname(hostname) in self.host_sets
        return hostname in self.hosts

    def _exported_hosts(self, hostname):
        if hostname.startswith(HOST_SET_PREFIX):
            return self.host_sets[from_vlun_hostname(hostname)]
        return [hostname]

    def create_vlun(self, volume_name, hostname):
        if volume_name not in self.volumes or not self._target_exists(hostname):
            raise _not_found("volume or host does not exist")
        for vlun in self.templates():
            if vlun['volumeName'] == volume_name and vlun['hostname'] == hostname:
                raise _conflict("vlun already exists")
        self.last_lun += 1
        self.add_vlun(volume_name, hostname, self.last_lun)
        for exported_host in self._exported_hosts(hostname):
            self.add_vlun(volume_name, exported_host, self.last_lun, active=True)
        return "{0},{1},{2}".format(volume_name, self.last_lun, hostname)

    def delete_vlun(self, volume_name, lun, hostname):
        for vlun in self.templates():
            if vlun['volumeName'] == volume_name and vlun['lun'] == lun and vlun['hostname'] == hostname:
                self.vluns = [other for other in self.vluns
                              if not (other['volumeName'] == volume_name and other['lun'] == lun
                                      and (other is vlun or other['active']))]
                return
        raise _not_found("vlun does not exist")
