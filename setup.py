from setuptools import setup

setup(
    name='wifi-info',
    version='1.0.0',
    description='Wi-Fi network information service',
    long_description='Reporting SSID, BSSID and local IP address of the active Wi-Fi connection behind authorization',
    author='Ferenc Nandor Janky & Attila Gombos',
    author_email='info@effective-range.com',
    maintainer='Ferenc Nandor Janky & Attila Gombos',
    maintainer_email='info@effective-range.com',
    packages=['wifi_info', 'wifi_utility', 'wifi_dbus'],
    scripts=['bin/wifi-info.py'],
    data_files=[
        ('config', ['config/wifi-info.conf.default']),
    ],
    install_requires=[
        'netifaces',
        'dbus-python',
        'PyGObject==3.50.0',
        'pygobject-stubs',
        'parameterized',
        'python-context-logger@git+https://github.com/EffectiveRange/python-context-logger.git@latest',
        'python-common-utility@git+https://github.com/EffectiveRange/python-common-utility.git@latest',
    ],
)
