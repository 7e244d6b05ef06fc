"""
postguard.core

Package “cœur” : tout ce qui est transversal (cross-cutting concerns) et ne dépend pas
du contenu du schéma validé.

- settings
  Configuration via variables d’environnement (port, niveau de log, variante du schéma…).

- errors
  Exceptions typées par classe d’échec (chargement du schéma, lecture du body, parsing JSON,
  moteur de validation) + construction du payload {"errors": [...]}.

- logging
  Logs JSON (1 event = 1 ligne) enrichis du request_id.

- request_id
  Identifiant de corrélation par requête (header X-Request-Id ou UUID généré).
"""
