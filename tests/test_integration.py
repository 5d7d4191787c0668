from pyinistore import IniParser, IniStore


def test_application_workflow(store, ini_path):
    store.set_value('Application', 'Name', 'MyApplication')
    store.set_value('Application', 'Version', '1.0.0')
    store.set_value('Database', 'ConnectionString',
                    'Server=localhost;Database=mydb')
    store.set_value('Database', 'Timeout', '30')
    store.set_value('Database', 'RetryCount', '3')
    store.set_value('UI', 'Theme', 'Dark')

    assert store.get_sections() == ['Application', 'Database', 'UI']
    assert store.get_keys('Database') == \
        ['ConnectionString', 'Timeout', 'RetryCount']
    assert store.get_value('Database', 'ConnectionString') == \
        'Server=localhost;Database=mydb'

    store.set_value('Application', 'Version', '1.1.0')
    store.set_value('UI', 'Theme', 'Light')
    store.delete_key('Database', 'RetryCount')

    content = ini_path.read_text(encoding='utf-8')
    assert 'Version=1.1.0' in content
    assert 'Theme=Light' in content
    assert 'RetryCount' not in content
    assert store.get_keys('Database') == ['ConnectionString', 'Timeout']


def test_restart_restores_everything(store, ini_path):
    expected = {
        'UserPreferences': {
            'Username': 'john.doe',
            'LastLogin': '2023-12-01 10:30:00',
            'RememberMe': 'true'},
        'RecentFiles': {
            'File1': r'C:\Documents\file1.txt',
            'File2': r'C:\Documents\file2.txt'},
    }
    for section, pairs in expected.items():
        for key, value in pairs.items():
            store.set_value(section, key, value)

    restarted = IniStore(ini_path)
    assert restarted.get_sections() == list(expected)
    for section, pairs in expected.items():
        assert restarted.get_keys(section) == list(pairs)
        for key, value in pairs.items():
            assert restarted.get_value(section, key) == value

    restarted.set_value('UserPreferences', 'LastLogin', '2023-12-02 09:15:00')
    assert restarted.get_value('UserPreferences', 'LastLogin') == \
        '2023-12-02 09:15:00'


def test_first_run_defaults(store):
    defaults = {'Theme': 'Light', 'Language': 'en-US', 'WindowWidth': '800'}
    for key, value in defaults.items():
        assert store.get_value('UI', key, value) == value
    for key, value in defaults.items():
        assert store.get_value('UI', key) == value
    assert store.get_keys('UI') == list(defaults)


def test_two_instances_on_one_path(ini_path):
    ini1 = IniStore(ini_path)
    ini2 = IniStore(ini_path)
    ini1.set_value('Instance1', 'Key1', 'Value1')
    ini2.set_value('Instance2', 'Key2', 'Value2')

    assert ini1.get_value('Instance1', 'Key1') == 'Value1'
    assert ini2.get_value('Instance2', 'Key2') == 'Value2'
    # ini2 saw ini1's save before writing its own.
    fresh = IniStore(ini_path)
    assert fresh.get_sections() == ['Instance1', 'Instance2']


def test_rewrite_of_unchanged_document_is_stable(store, ini_path):
    store.set_value('A', 'k', '  v  ')
    store.set_value('B', 'x', 'a=b')
    first = ini_path.read_bytes()
    store.set_value('A', 'k', '  v  ')
    assert ini_path.read_bytes() == first
    assert IniParser.dumps(store.document) == first.decode('utf-8')


def test_many_keys_and_sections(store, ini_path):
    for i in range(300):
        store.set_value('Bulk', f'Key{i:03d}', f'Value{i:03d}')
    for i in range(50):
        store.set_value(f'Section{i:02d}', 'k', str(i))

    restarted = IniStore(ini_path)
    assert len(restarted.get_keys('Bulk')) == 300
    assert len(restarted.get_sections()) == 51
    assert restarted.get_value('bulk', 'key150') == 'Value150'
    assert restarted.get_value('section49', 'K') == '49'
