"""Tests for the Definition models."""

import uuid

import pydantic
import pytest

from vzconf.domain import Definition, FilesystemSpec, Instance, NetInterface, Status


class TestDefinition:

    def test_skeleton(self):
        skeleton = Definition.skeleton(101)
        assert skeleton.name == "101"
        assert skeleton.uuid is None
        assert skeleton.is_skeleton
        assert skeleton.nets == ()

    def test_frozen(self):
        definition = Definition(name="101", filesystem=FilesystemSpec(template="centos-6"))
        with pytest.raises(pydantic.ValidationError):
            definition.name = "102"

    def test_rejects_empty_name(self):
        with pytest.raises(pydantic.ValidationError):
            Definition(name="")

    def test_rejects_negative_vcpus(self):
        with pytest.raises(pydantic.ValidationError):
            Definition(name="101", vcpus=-1)

    def test_to_dict(self):
        domain_uuid = uuid.uuid4()
        definition = Definition(
            name="101",
            uuid=domain_uuid,
            vcpus=2,
            filesystem=FilesystemSpec(template="centos-6", disk_size=10000),
            nets=[NetInterface(type="bridge", bridge="vzbr0")],
        )
        data = definition.to_dict()
        assert data["uuid"] == str(domain_uuid)
        assert data["filesystem"] == {"template": "centos-6", "disk_size": 10000, "disk_inodes": 0}
        assert data["nets"][0]["bridge"] == "vzbr0"


class TestInstance:

    def test_defaults(self):
        instance = Instance(Definition.skeleton(101))
        assert instance.instance_id == -1
        assert instance.status is Status.SHUTOFF
        assert not instance.active
        assert instance.name == "101"

    def test_identity_equality(self):
        definition = Definition.skeleton(101)
        assert Instance(definition) != Instance(definition)
