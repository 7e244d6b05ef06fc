"""
scripts

Package utilitaire pour les scripts exécutables (CLI) du projet.

Rôle (fonctionnel) :
- validate_file : validation hors serveur de fichiers JSON contre le schéma embarqué.

Note :
- Les scripts orchestrent et appellent les modules de `postguard/` (schéma, validation) ;
  aucune logique de validation n’est dupliquée ici.
"""
