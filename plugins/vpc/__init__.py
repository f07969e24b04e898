"""
plugins/vpc - VPC Tables

Subnet and other network resource tables
"""

CATEGORY = {
    "name": "vpc",
    "display_name": "VPC",
    "description": "VPC 및 네트워크 리소스 테이블",
    "description_en": "VPC and Network Resource Tables",
    "aliases": ["network"],
}

TABLES = [
    {
        "name": "aws_vpc_subnet",
        "description": "AWS VPC Subnet",
        "module": "subnet",
    },
]
