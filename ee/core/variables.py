"""EasyEngine core variable module"""
import os


class EEVar():
    """Intialization of core variables"""

    # EasyEngine version
    ee_version = "4.1.0"

    # EasyEngine root directory shared by all sites
    ee_root_dir = '/opt/easyengine'

    # Site database
    ee_db_path = '{0}/db/ee.sqlite'.format(ee_root_dir)
    ee_db_uri = 'sqlite:///{0}'.format(ee_db_path)

    # Configuration
    ee_config_dir = '/etc/ee'
    ee_config_file = '{0}/ee.conf'.format(ee_config_dir)
    ee_log_file = '/var/log/ee/ee.log'

    # admin-tools
    ee_admin_tools_dir = '{0}/admin-tools'.format(ee_root_dir)
    ee_admin_tools_file = '{0}/admin-tools.json'.format(ee_config_dir)
    ee_admin_path = '/var/www/htdocs/ee-admin'
    ee_admin_auth_dir = '{0}/services/nginx-proxy/htpasswd'.format(
        ee_root_dir)
    ee_admin_auth_user = 'easyengine'
    ee_tmp_dir = '{0}/tmp'.format(ee_root_dir)
    ee_lock_dir = '/run'
    ee_template_dir = os.path.join(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
        'cli', 'templates')

    # Timeouts (seconds)
    ee_download_timeout = 1200
    ee_compose_timeout = 600
    ee_install_lock_timeout = 1800

    # docker compose
    ee_compose_cmd = ['docker-compose']
    ee_compose_file = 'docker-compose.yml'
    ee_compose_admin_file = 'docker-compose-admin.yml'
    ee_admin_min_services = ['nginx', 'php']

    # pinned predis release shipped inside phpRedisAdmin
    ee_predis_version = '1.1.1'
    ee_predis_url = ('https://github.com/nrk/predis/archive/v{0}.zip'
                     .format(ee_predis_version))
