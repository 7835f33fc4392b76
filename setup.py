from setuptools import find_packages, setup
import os
from glob import glob

package_name = 'joint_diagnostics'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    package_data={package_name: ['robots.yaml']},
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        (os.path.join('share', package_name, 'launch'),
            glob('launch/*.py')),
        (os.path.join('share', package_name, 'config'),
            glob('config/*.yaml')),
    ],
    install_requires=[
        'setuptools',
        'PyYAML',
        'fastapi',
        'pydantic',
        'uvicorn',
    ],
    zip_safe=True,
    maintainer='fadag',
    maintainer_email='fada@uw.edu',
    description='Joint temperature, stiffness and current diagnostics for NAOqi robots.',
    license='Apache-2.0',
    extras_require={
        'naoqi': [
            'qi',
        ],
        'test': [
            'pytest',
            'httpx',
        ],
    },
    entry_points={
        'console_scripts': [
            'joint_diagnostics_node = joint_diagnostics.diagnostics_node:main',
            'api_node = joint_diagnostics.api_node:main',
        ],
    },
)
